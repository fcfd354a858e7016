import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class MaterialRead(BaseModel):
    code: str
    name: str

    class Config:
        from_attributes = True


class StaffRead(BaseModel):
    id: uuid.UUID
    name: str
    designation: Optional[str]
    active: bool

    class Config:
        from_attributes = True


class AuditLogRead(BaseModel):
    id: uuid.UUID
    action: str
    details: Optional[str]
    actor_role: str
    actor_id: Optional[uuid.UUID]
    created_at: datetime

    class Config:
        from_attributes = True
