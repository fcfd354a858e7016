import uuid
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel
from models.complaints import ComplaintCategory, ComplaintStatus
from schemas.jobs import JobRead

# Request schema for creating a complaint
class ComplaintCreate(BaseModel):
    bldg_name: str
    flat_no: str
    mobile_no: str
    preferred_time: str
    category: ComplaintCategory
    description: str
    tenant_id: Optional[uuid.UUID] = None  # ignored for tenants, optional for admins
    image_url: Optional[str] = None

# Response schema
class ComplaintRead(BaseModel):
    id: uuid.UUID
    date_registered: date
    bldg_name: str
    flat_no: str
    mobile_no: str
    preferred_time: str
    category: ComplaintCategory
    description: str
    status: ComplaintStatus
    duplicate_generated: bool
    tenant_id: Optional[uuid.UUID]
    image_url: Optional[str]
    created_at: datetime
    jobs: List[JobRead] = []

    class Config:
        from_attributes = True  # allows reading from ORM objects
