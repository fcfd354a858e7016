import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from models.tenant import BuildingName
from models.user import UserRole


class Principal(BaseModel):
    """Who is calling. Passed explicitly into every service call."""

    role: UserRole
    subject_id: Optional[uuid.UUID] = None  # user id or tenant id
    tenant_id: Optional[uuid.UUID] = None   # set only for tenants


class TenantCreate(BaseModel):
    mobile_no: str
    building_name: BuildingName
    room_no: str
    password: str


class TenantRead(BaseModel):
    id: uuid.UUID
    mobile_no: str
    building_name: BuildingName
    room_no: str
    created_at: datetime

    class Config:
        from_attributes = True


class TenantLogin(BaseModel):
    mobile_no: str
    password: str


class StaffLogin(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    tenant_id: Optional[uuid.UUID] = None
