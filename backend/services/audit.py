import logging
from typing import List, Optional
from models.audit_log import AuditAction, AuditLog
from repositories.base import Repository
from schemas.auth import Principal

logger = logging.getLogger(__name__)


# Helper: Audit log. Call inside the caller's transaction so the entry
# commits or rolls back with the change it describes.
def log_action(repo: Repository, performed_by: Principal, action: AuditAction, details: Optional[str] = None):
    logger.info("role=%s id=%s action=%s details=%s", performed_by.role.value, performed_by.subject_id, action.value, details)
    entry = AuditLog(
        action=action.value,
        details=details,
        actor_role=performed_by.role.value,
        actor_id=performed_by.subject_id,
    )
    return repo.add_audit_entry(entry)


def list_audit_entries(repo: Repository, limit: int = 100) -> List[AuditLog]:
    return repo.list_audit_entries(limit)
