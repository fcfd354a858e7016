import uuid
from datetime import date, datetime, time
from typing import List, Optional
from pydantic import BaseModel
from models.complaints import ComplaintStatus


class MaterialLine(BaseModel):
    code: str
    qty: float


class MaterialUsed(BaseModel):
    code: str
    name: str
    qty: float


# Job fields as captured on the job card
class JobCreate(BaseModel):
    complaint_id: uuid.UUID
    date_attended: date
    time_attended: time
    staff_attended: List[str]
    job_card_no: str
    materials_used: List[MaterialLine] = []
    time_completed: Optional[time] = None


# Job card plus the complaint status it leads to
class JobUpdateRequest(JobCreate):
    outcome: ComplaintStatus
    reason: Optional[str] = None


class JobRead(BaseModel):
    id: uuid.UUID
    complaint_id: uuid.UUID
    date_attended: date
    time_attended: time
    staff_attended: List[str]
    job_card_no: str
    materials_used: List[MaterialUsed]
    time_completed: Optional[time]
    reason_not_completed: Optional[str]
    approved: bool
    created_at: datetime

    class Config:
        from_attributes = True
