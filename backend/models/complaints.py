import uuid
from datetime import date, datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field
import enum


class ComplaintCategory(str, enum.Enum):
    electrical = "electrical"
    plumbing = "plumbing"
    aircond = "aircond"


class ComplaintStatus(str, enum.Enum):
    pending = "Pending"                            # Registered, nobody has visited yet
    attended = "Attended"                          # Staff visited, work ongoing
    completed = "Completed"
    not_completed = "Not Completed"                # Visit failed, follow-up complaint opened
    tenant_not_available = "Tenant Not Available"  # Nobody home, follow-up complaint opened


# Statuses a job submission may set
OUTCOME_STATUSES = frozenset({
    ComplaintStatus.attended,
    ComplaintStatus.completed,
    ComplaintStatus.not_completed,
    ComplaintStatus.tenant_not_available,
})

# Outcomes that re-open the issue as a fresh complaint
FOLLOW_UP_STATUSES = frozenset({
    ComplaintStatus.not_completed,
    ComplaintStatus.tenant_not_available,
})

PREFERRED_TIME_SLOTS = [
    "08:00 - 09:00", "09:00 - 10:00", "10:00 - 11:00", "11:00 - 12:00",
    "12:00 - 13:00", "13:00 - 14:00", "14:00 - 15:00", "15:00 - 16:00",
    "16:00 - 17:00", "17:00 - 18:00",
]


class Complaint(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    date_registered: date = Field(default_factory=date.today, index=True, nullable=False)
    bldg_name: str
    flat_no: str
    mobile_no: str
    preferred_time: str
    category: ComplaintCategory
    description: str
    status: ComplaintStatus = Field(default=ComplaintStatus.pending)
    duplicate_generated: bool = Field(default=False, nullable=False)
    tenant_id: Optional[uuid.UUID] = Field(default=None, foreign_key="tenant.id", index=True)
    image_url: Optional[str] = None  # uploaded photo, stored elsewhere
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
