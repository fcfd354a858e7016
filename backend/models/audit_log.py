import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field
import enum

class AuditAction(str, enum.Enum):
    # Complaint-related actions
    CREATED_COMPLAINT = "created_complaint"
    GENERATED_FOLLOW_UP = "generated_follow_up"

    # Job-related actions
    SUBMITTED_JOB = "submitted_job"
    APPROVED_JOB = "approved_job"

    # Account-related actions
    REGISTERED_TENANT = "registered_tenant"

class AuditLog(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    action: str  # e.g., "submitted_job", "approved_job"
    details: Optional[str] = None

    actor_role: str  # tenant, admin or supervisor
    actor_id: Optional[uuid.UUID] = None  # user or tenant id, depending on role
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
