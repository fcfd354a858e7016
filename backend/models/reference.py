import uuid
from typing import Optional
from sqlmodel import SQLModel, Field


class Material(SQLModel, table=True):
    code: str = Field(primary_key=True)
    name: str


class Staff(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(index=True)
    designation: Optional[str] = None
    active: bool = Field(default=True, nullable=False)
