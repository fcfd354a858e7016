import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
import enum


class BuildingName(str, enum.Enum):
    tower_a = "Tower A"
    tower_b = "Tower B"
    tower_c = "Tower C"


class Tenant(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    mobile_no: str = Field(index=True, unique=True, nullable=False)  # login identifier
    building_name: BuildingName
    room_no: str
    password_hash: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
