import uuid
import logging
from contextlib import contextmanager
from typing import Iterable, List, Optional
from sqlalchemy import false, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col
from core.exceptions import StorageError
from models.audit_log import AuditLog
from models.complaints import Complaint
from models.job import Job
from models.reference import Material, Staff
from models.tenant import Tenant
from models.user import User
from repositories.base import Repository

logger = logging.getLogger(__name__)


class SQLRepository(Repository):
    """Repository over a SQLModel session. Writes are flushed, never committed, outside ``transaction()``."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Transaction rolled back: %s", e)
            raise StorageError("Could not complete action") from e
        except Exception:
            self.session.rollback()
            raise

    @contextmanager
    def _storage_errors(self, what: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Database error %s: %s", what, e)
            raise StorageError("Could not complete action") from e

    def _add(self, obj):
        with self._storage_errors(f"writing {type(obj).__name__}"):
            self.session.add(obj)
            self.session.flush()
        return obj

    def _first(self, statement):
        with self._storage_errors("reading"):
            return self.session.exec(statement).first()

    def _all(self, statement) -> list:
        with self._storage_errors("reading"):
            return list(self.session.exec(statement).all())

    def _get(self, model, key):
        with self._storage_errors(f"reading {model.__name__}"):
            return self.session.get(model, key)

    # Complaints

    def add_complaint(self, complaint: Complaint) -> Complaint:
        return self._add(complaint)

    def get_complaint(self, complaint_id: uuid.UUID, for_update: bool = False) -> Optional[Complaint]:
        statement = select(Complaint).where(Complaint.id == complaint_id)
        if for_update:
            statement = statement.with_for_update()
        return self._first(statement)

    def save_complaint(self, complaint: Complaint) -> Complaint:
        return self._add(complaint)

    def list_complaints(self, tenant_id: Optional[uuid.UUID] = None) -> List[Complaint]:
        statement = select(Complaint)
        if tenant_id is not None:
            statement = statement.where(Complaint.tenant_id == tenant_id)
        statement = statement.order_by(col(Complaint.date_registered).desc(), col(Complaint.created_at).asc())
        return self._all(statement)

    def claim_duplicate(self, complaint_id: uuid.UUID) -> bool:
        # Conditional write: concurrent claimants cannot both see rowcount 1
        statement = (
            update(Complaint)
            .where(col(Complaint.id) == complaint_id, col(Complaint.duplicate_generated) == false())
            .values(duplicate_generated=True)
            .execution_options(synchronize_session=False)
        )
        with self._storage_errors("claiming follow-up"):
            result = self.session.execute(statement)
        return result.rowcount == 1

    # Jobs

    def add_job(self, job: Job) -> Job:
        return self._add(job)

    def get_job(self, job_id: uuid.UUID) -> Optional[Job]:
        return self._get(Job, job_id)

    def save_job(self, job: Job) -> Job:
        return self._add(job)

    def list_jobs(self, complaint_ids: Iterable[uuid.UUID]) -> List[Job]:
        ids = list(complaint_ids)
        if not ids:
            return []
        statement = select(Job).where(col(Job.complaint_id).in_(ids)).order_by(col(Job.created_at).asc())
        return self._all(statement)

    # Accounts

    def add_tenant(self, tenant: Tenant) -> Tenant:
        return self._add(tenant)

    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        return self._get(Tenant, tenant_id)

    def get_tenant_by_mobile(self, mobile_no: str) -> Optional[Tenant]:
        return self._first(select(Tenant).where(Tenant.mobile_no == mobile_no))

    def add_user(self, user: User) -> User:
        return self._add(user)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._first(select(User).where(User.username == username))

    # Reference data

    def save_material(self, material: Material) -> Material:
        existing = self._get(Material, material.code)
        if existing:
            existing.name = material.name
            return self._add(existing)
        return self._add(material)

    def get_material(self, code: str) -> Optional[Material]:
        return self._get(Material, code)

    def list_materials(self) -> List[Material]:
        return self._all(select(Material).order_by(col(Material.code)))

    def add_staff(self, staff: Staff) -> Staff:
        return self._add(staff)

    def list_active_staff(self) -> List[Staff]:
        statement = select(Staff).where(col(Staff.active).is_(True)).order_by(col(Staff.name))
        return self._all(statement)

    # Audit

    def add_audit_entry(self, entry: AuditLog) -> AuditLog:
        return self._add(entry)

    def list_audit_entries(self, limit: int = 100) -> List[AuditLog]:
        statement = select(AuditLog).order_by(col(AuditLog.created_at).desc()).limit(limit)
        return self._all(statement)
