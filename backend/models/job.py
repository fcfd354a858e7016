import uuid
from datetime import date, datetime, time, timezone
from typing import List, Optional
from sqlmodel import SQLModel, Field, Column, JSON


class Job(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    complaint_id: uuid.UUID = Field(foreign_key="complaint.id", index=True, nullable=False)
    date_attended: date
    time_attended: time
    staff_attended: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    job_card_no: str
    # [{"code": ..., "name": ..., "qty": ...}]
    materials_used: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    time_completed: Optional[time] = None
    reason_not_completed: Optional[str] = None
    approved: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
