"""
Storage interface for the maintenance tracker.

Services only talk to a ``Repository``. ``SQLRepository`` backs the API with
a database session; ``InMemoryRepository`` implements the same contract for
tests. Writes are only durable once the enclosing ``transaction()`` block
exits without an exception.
"""

import abc
import uuid
from contextlib import AbstractContextManager
from typing import Iterable, List, Optional

from models.audit_log import AuditLog
from models.complaints import Complaint
from models.job import Job
from models.reference import Material, Staff
from models.tenant import Tenant
from models.user import User


class Repository(abc.ABC):

    @abc.abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Unit of work: commit on success, roll everything back on error."""

    # Complaints

    @abc.abstractmethod
    def add_complaint(self, complaint: Complaint) -> Complaint: ...

    @abc.abstractmethod
    def get_complaint(self, complaint_id: uuid.UUID, for_update: bool = False) -> Optional[Complaint]:
        """Fetch one complaint; ``for_update`` locks the row until commit."""

    @abc.abstractmethod
    def save_complaint(self, complaint: Complaint) -> Complaint: ...

    @abc.abstractmethod
    def list_complaints(self, tenant_id: Optional[uuid.UUID] = None) -> List[Complaint]:
        """Newest ``date_registered`` first, ties in insertion order."""

    @abc.abstractmethod
    def claim_duplicate(self, complaint_id: uuid.UUID) -> bool:
        """
        Flip ``duplicate_generated`` from false to true.

        Returns True only for the caller that made the change, so at most
        one follow-up complaint is ever created per complaint.
        """

    # Jobs

    @abc.abstractmethod
    def add_job(self, job: Job) -> Job: ...

    @abc.abstractmethod
    def get_job(self, job_id: uuid.UUID) -> Optional[Job]: ...

    @abc.abstractmethod
    def save_job(self, job: Job) -> Job: ...

    @abc.abstractmethod
    def list_jobs(self, complaint_ids: Iterable[uuid.UUID]) -> List[Job]:
        """Jobs of the given complaints in insertion order."""

    # Accounts

    @abc.abstractmethod
    def add_tenant(self, tenant: Tenant) -> Tenant: ...

    @abc.abstractmethod
    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]: ...

    @abc.abstractmethod
    def get_tenant_by_mobile(self, mobile_no: str) -> Optional[Tenant]: ...

    @abc.abstractmethod
    def add_user(self, user: User) -> User: ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    # Reference data

    @abc.abstractmethod
    def save_material(self, material: Material) -> Material:
        """Insert or replace by code."""

    @abc.abstractmethod
    def get_material(self, code: str) -> Optional[Material]: ...

    @abc.abstractmethod
    def list_materials(self) -> List[Material]: ...

    @abc.abstractmethod
    def add_staff(self, staff: Staff) -> Staff: ...

    @abc.abstractmethod
    def list_active_staff(self) -> List[Staff]: ...

    # Audit

    @abc.abstractmethod
    def add_audit_entry(self, entry: AuditLog) -> AuditLog: ...

    @abc.abstractmethod
    def list_audit_entries(self, limit: int = 100) -> List[AuditLog]: ...
