import uuid
from fastapi import APIRouter, Depends
from core.database import get_repository
from repositories.base import Repository
from schemas.auth import Principal
from schemas.jobs import JobRead
from services import jobs as job_service
from utils.security import supervisor_required

router = APIRouter(tags=["Supervisor"])


# Sign off a job. Approving twice is harmless.
@router.patch("/jobs/{job_id}/approve", response_model=JobRead)
def approve_job(
    job_id: uuid.UUID,
    repo: Repository = Depends(get_repository),
    supervisor: Principal = Depends(supervisor_required),
):
    job = job_service.approve_job(repo, supervisor, job_id)
    return JobRead.model_validate(job)
