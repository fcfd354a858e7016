import copy
import uuid
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional
from models.audit_log import AuditLog
from models.complaints import Complaint
from models.job import Job
from models.reference import Material, Staff
from models.tenant import Tenant
from models.user import User
from repositories.base import Repository


class InMemoryRepository(Repository):
    """
    Row store kept in plain dicts.

    Rows are stored as ``model_dump()`` output and rebuilt on every read, so
    callers never share state with the store. ``transaction()`` holds a
    re-entrant lock for its whole duration and restores a snapshot if the
    block raises.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._tables: Dict[str, dict] = {
            "complaint": {},
            "job": {},
            "tenant": {},
            "user": {},
            "material": {},
            "staff": {},
            "audit_log": {},
        }

    @contextmanager
    def transaction(self):
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self
            except Exception:
                self._tables = snapshot
                raise

    def _put(self, table: str, key, obj):
        with self._lock:
            self._tables[table][key] = obj.model_dump()
        return obj

    def _rows(self, table: str) -> List[dict]:
        with self._lock:
            return [dict(row) for row in self._tables[table].values()]

    def _row(self, table: str, key) -> Optional[dict]:
        with self._lock:
            row = self._tables[table].get(key)
            return dict(row) if row is not None else None

    # Complaints

    def add_complaint(self, complaint: Complaint) -> Complaint:
        return self._put("complaint", complaint.id, complaint)

    def get_complaint(self, complaint_id: uuid.UUID, for_update: bool = False) -> Optional[Complaint]:
        row = self._row("complaint", complaint_id)
        return Complaint(**row) if row else None

    def save_complaint(self, complaint: Complaint) -> Complaint:
        return self._put("complaint", complaint.id, complaint)

    def list_complaints(self, tenant_id: Optional[uuid.UUID] = None) -> List[Complaint]:
        rows = self._rows("complaint")
        if tenant_id is not None:
            rows = [row for row in rows if row["tenant_id"] == tenant_id]
        # dicts keep insertion order and sorted() is stable
        rows = sorted(rows, key=lambda row: row["date_registered"], reverse=True)
        return [Complaint(**row) for row in rows]

    def claim_duplicate(self, complaint_id: uuid.UUID) -> bool:
        with self._lock:
            row = self._tables["complaint"].get(complaint_id)
            if row is None or row["duplicate_generated"]:
                return False
            row["duplicate_generated"] = True
            return True

    # Jobs

    def add_job(self, job: Job) -> Job:
        return self._put("job", job.id, job)

    def get_job(self, job_id: uuid.UUID) -> Optional[Job]:
        row = self._row("job", job_id)
        return Job(**row) if row else None

    def save_job(self, job: Job) -> Job:
        return self._put("job", job.id, job)

    def list_jobs(self, complaint_ids: Iterable[uuid.UUID]) -> List[Job]:
        wanted = set(complaint_ids)
        return [Job(**row) for row in self._rows("job") if row["complaint_id"] in wanted]

    # Accounts

    def add_tenant(self, tenant: Tenant) -> Tenant:
        return self._put("tenant", tenant.id, tenant)

    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        row = self._row("tenant", tenant_id)
        return Tenant(**row) if row else None

    def get_tenant_by_mobile(self, mobile_no: str) -> Optional[Tenant]:
        for row in self._rows("tenant"):
            if row["mobile_no"] == mobile_no:
                return Tenant(**row)
        return None

    def add_user(self, user: User) -> User:
        return self._put("user", user.id, user)

    def get_user_by_username(self, username: str) -> Optional[User]:
        for row in self._rows("user"):
            if row["username"] == username:
                return User(**row)
        return None

    # Reference data

    def save_material(self, material: Material) -> Material:
        return self._put("material", material.code, material)

    def get_material(self, code: str) -> Optional[Material]:
        row = self._row("material", code)
        return Material(**row) if row else None

    def list_materials(self) -> List[Material]:
        return [Material(**row) for row in sorted(self._rows("material"), key=lambda row: row["code"])]

    def add_staff(self, staff: Staff) -> Staff:
        return self._put("staff", staff.id, staff)

    def list_active_staff(self) -> List[Staff]:
        rows = [row for row in self._rows("staff") if row["active"]]
        return [Staff(**row) for row in sorted(rows, key=lambda row: row["name"])]

    # Audit

    def add_audit_entry(self, entry: AuditLog) -> AuditLog:
        return self._put("audit_log", entry.id, entry)

    def list_audit_entries(self, limit: int = 100) -> List[AuditLog]:
        rows = list(reversed(self._rows("audit_log")))
        return [AuditLog(**row) for row in rows[:limit]]
