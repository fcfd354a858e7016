from typing import List
from fastapi import APIRouter, Depends, Query
from core.database import get_repository
from repositories.base import Repository
from schemas.auth import Principal
from schemas.jobs import JobRead, JobUpdateRequest
from schemas.reference import AuditLogRead
from services import audit as audit_service
from services import complaints as complaint_service
from utils.security import admin_required

router = APIRouter(tags=["Admin"])


# Record a job visit and apply its outcome to the complaint
@router.post("/jobs", response_model=JobRead, status_code=201)
def submit_job_update(
    data: JobUpdateRequest,
    repo: Repository = Depends(get_repository),
    admin: Principal = Depends(admin_required),
):
    job = complaint_service.submit_job_update(repo, admin, data, data.outcome, data.reason)
    return JobRead.model_validate(job)


@router.get("/audit-log", response_model=List[AuditLogRead])
def get_audit_log(
    limit: int = Query(100, ge=1, le=1000),
    repo: Repository = Depends(get_repository),
    admin: Principal = Depends(admin_required),
):
    return audit_service.list_audit_entries(repo, limit)
