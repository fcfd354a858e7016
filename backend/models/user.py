import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
import enum


class UserRole(str, enum.Enum):
    tenant = "tenant"
    admin = "admin"
    supervisor = "supervisor"


# Roles that log in with a username rather than a mobile number
STAFF_ROLES = frozenset({UserRole.admin, UserRole.supervisor})


class User(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    username: str = Field(index=True, unique=True, nullable=False)
    password_hash: str = Field(nullable=False)
    role: UserRole = Field(default=UserRole.admin, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
