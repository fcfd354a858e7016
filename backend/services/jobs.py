import uuid
import logging
from core.exceptions import NotFoundError
from models.audit_log import AuditAction
from models.job import Job
from models.user import UserRole
from repositories.base import Repository
from schemas.auth import Principal
from services.audit import log_action
from utils.security import require_role

logger = logging.getLogger(__name__)


def approve_job(repo: Repository, principal: Principal, job_id: uuid.UUID) -> Job:
    """
    Supervisor sign-off on a job.

    Idempotent, and independent of the complaint status. There is no way to
    withdraw an approval.
    """
    require_role(principal, UserRole.supervisor)

    with repo.transaction():
        job = repo.get_job(job_id)
        if not job:
            raise NotFoundError("Job not found")

        if job.approved:
            logger.info("Job %s already approved", job_id)
            return job

        job.approved = True
        repo.save_job(job)
        log_action(
            repo,
            performed_by=principal,
            action=AuditAction.APPROVED_JOB,
            details=f"Job card {job.job_card_no} on complaint {job.complaint_id} approved",
        )

    return job
