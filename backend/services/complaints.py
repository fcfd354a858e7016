"""
Complaint lifecycle.

A complaint starts as Pending. Each job submitted against it overwrites its
status with the job's outcome; an outcome of Not Completed or Tenant Not
Available also re-opens the issue as a fresh Pending complaint (the
follow-up), at most once per complaint.
"""

import uuid
import logging
from collections import defaultdict
from datetime import date
from typing import List, Optional
from core.exceptions import ForbiddenError, NotFoundError, ValidationFailure
from models.audit_log import AuditAction
from models.complaints import (
    Complaint,
    ComplaintStatus,
    FOLLOW_UP_STATUSES,
    OUTCOME_STATUSES,
    PREFERRED_TIME_SLOTS,
)
from models.job import Job
from models.user import UserRole
from repositories.base import Repository
from schemas.auth import Principal
from schemas.complaints import ComplaintCreate, ComplaintRead
from schemas.jobs import JobCreate, JobRead, MaterialLine, MaterialUsed
from services.audit import log_action
from utils.security import require_role

logger = logging.getLogger(__name__)

DEFAULT_FOLLOW_UP_REASON = "Status requires follow-up"


def _require_text(field: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationFailure(f"{field} is required", {"field": field})
    return value.strip()


def create_complaint(repo: Repository, principal: Principal, data: ComplaintCreate) -> Complaint:
    require_role(principal, UserRole.tenant, UserRole.admin)

    if data.preferred_time not in PREFERRED_TIME_SLOTS:
        raise ValidationFailure(
            f"Invalid preferred time: {data.preferred_time}",
            {"field": "preferred_time", "allowed": PREFERRED_TIME_SLOTS},
        )

    # Tenants always file against their own account
    tenant_id = principal.tenant_id if principal.role == UserRole.tenant else data.tenant_id

    with repo.transaction():
        if tenant_id is not None and repo.get_tenant(tenant_id) is None:
            raise NotFoundError("Tenant not found")

        complaint = Complaint(
            bldg_name=_require_text("bldg_name", data.bldg_name),
            flat_no=_require_text("flat_no", data.flat_no),
            mobile_no=_require_text("mobile_no", data.mobile_no),
            preferred_time=data.preferred_time,
            category=data.category,
            description=_require_text("description", data.description),
            status=ComplaintStatus.pending,
            duplicate_generated=False,
            date_registered=date.today(),
            tenant_id=tenant_id,
            image_url=data.image_url or None,
        )
        repo.add_complaint(complaint)
        log_action(
            repo,
            performed_by=principal,
            action=AuditAction.CREATED_COMPLAINT,
            details=f"Complaint {complaint.id} ({complaint.category.value}) for {complaint.bldg_name} flat {complaint.flat_no}",
        )

    logger.info("Created complaint %s", complaint.id)
    return complaint


def _validate_job(job: JobCreate, outcome: ComplaintStatus, reason: Optional[str]):
    if outcome not in OUTCOME_STATUSES:
        raise ValidationFailure(f"Invalid outcome status: {outcome.value}", {"field": "outcome"})

    if not job.staff_attended or any(not name.strip() for name in job.staff_attended):
        raise ValidationFailure("At least one staff member must be recorded", {"field": "staff_attended"})

    _require_text("job_card_no", job.job_card_no)

    if job.time_completed is not None and outcome != ComplaintStatus.completed:
        raise ValidationFailure("time_completed is only allowed for Completed jobs", {"field": "time_completed"})

    if reason and outcome not in FOLLOW_UP_STATUSES:
        raise ValidationFailure(
            "A reason is only allowed for Not Completed or Tenant Not Available jobs",
            {"field": "reason"},
        )


def _resolve_materials(repo: Repository, lines: List[MaterialLine]) -> List[MaterialUsed]:
    resolved = []
    for line in lines:
        if line.qty <= 0:
            raise ValidationFailure(f"Quantity for {line.code} must be positive", {"field": "materials_used"})
        material = repo.get_material(line.code)
        if material is None:
            raise ValidationFailure(f"Unknown material code: {line.code}", {"field": "materials_used"})
        resolved.append(MaterialUsed(code=material.code, name=material.name, qty=line.qty))
    return resolved


def _follow_up_description(original: Complaint, reason: Optional[str]) -> str:
    return (
        f"(Duplicated from complaint ID {original.id}) {original.description}"
        f" - Reason: {reason or DEFAULT_FOLLOW_UP_REASON}"
    )


def submit_job_update(
    repo: Repository,
    principal: Principal,
    job_data: JobCreate,
    outcome: ComplaintStatus,
    reason: Optional[str] = None,
) -> Job:
    """
    Record a visit against a complaint and apply its outcome.

    The job insert, the status overwrite and any follow-up complaint are
    written in one transaction. Not idempotent: every call records a new
    job.
    """
    require_role(principal, UserRole.admin)
    reason = reason.strip() if reason and reason.strip() else None
    _validate_job(job_data, outcome, reason)

    with repo.transaction():
        complaint = repo.get_complaint(job_data.complaint_id, for_update=True)
        if complaint is None:
            raise NotFoundError("Complaint not found")

        materials = _resolve_materials(repo, job_data.materials_used)

        job = Job(
            complaint_id=complaint.id,
            date_attended=job_data.date_attended,
            time_attended=job_data.time_attended,
            staff_attended=[name.strip() for name in job_data.staff_attended],
            job_card_no=job_data.job_card_no.strip(),
            materials_used=[m.model_dump() for m in materials],
            time_completed=job_data.time_completed,
            reason_not_completed=reason if outcome in FOLLOW_UP_STATUSES else None,
            approved=False,
        )
        repo.add_job(job)

        previous = complaint.status
        complaint.status = outcome
        repo.save_complaint(complaint)
        logger.info("Complaint %s: %s -> %s (job %s)", complaint.id, previous.value, outcome.value, job.id)

        log_action(
            repo,
            performed_by=principal,
            action=AuditAction.SUBMITTED_JOB,
            details=f"Job card {job.job_card_no} on complaint {complaint.id}: {outcome.value}",
        )

        if outcome in FOLLOW_UP_STATUSES:
            if repo.claim_duplicate(complaint.id):
                follow_up = Complaint(
                    date_registered=date.today(),
                    bldg_name=complaint.bldg_name,
                    flat_no=complaint.flat_no,
                    mobile_no=complaint.mobile_no,
                    preferred_time=complaint.preferred_time,
                    category=complaint.category,
                    description=_follow_up_description(complaint, reason),
                    status=ComplaintStatus.pending,
                    duplicate_generated=False,
                    tenant_id=complaint.tenant_id,
                )
                repo.add_complaint(follow_up)
                log_action(
                    repo,
                    performed_by=principal,
                    action=AuditAction.GENERATED_FOLLOW_UP,
                    details=f"Complaint {follow_up.id} opened from {complaint.id}",
                )
                logger.info("Complaint %s re-opened as %s", complaint.id, follow_up.id)
            else:
                logger.info("Complaint %s already has a follow-up, none created", complaint.id)

    return job


def _with_jobs(repo: Repository, complaints: List[Complaint]) -> List[ComplaintRead]:
    jobs_by_complaint = defaultdict(list)
    for job in repo.list_jobs(c.id for c in complaints):
        jobs_by_complaint[job.complaint_id].append(JobRead.model_validate(job))

    return [
        ComplaintRead.model_validate(c).model_copy(update={"jobs": jobs_by_complaint[c.id]})
        for c in complaints
    ]


def list_complaints(
    repo: Repository,
    principal: Principal,
    tenant_id: Optional[uuid.UUID] = None,
) -> List[ComplaintRead]:
    """
    Complaints with their jobs, newest registration date first.

    Tenants only ever get their own complaints. A tenant filter is an exact
    match, so complaints filed without a tenant never show up in it.
    """
    if principal.role == UserRole.tenant:
        if principal.tenant_id is None or (tenant_id is not None and tenant_id != principal.tenant_id):
            raise ForbiddenError("Tenants can only view their own complaints")
        tenant_id = principal.tenant_id

    return _with_jobs(repo, repo.list_complaints(tenant_id))


def get_complaint(repo: Repository, principal: Principal, complaint_id: uuid.UUID) -> Optional[ComplaintRead]:
    complaint = repo.get_complaint(complaint_id)
    if complaint is None:
        return None
    if principal.role == UserRole.tenant and complaint.tenant_id != principal.tenant_id:
        return None
    return _with_jobs(repo, [complaint])[0]
