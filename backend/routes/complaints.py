import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from core.database import get_repository
from models.user import UserRole
from repositories.base import Repository
from schemas.auth import Principal
from schemas.complaints import ComplaintCreate, ComplaintRead
from services import complaints as complaint_service
from utils.security import get_current_user, role_required

router = APIRouter(tags=["Complaints"])


@router.post("/", response_model=ComplaintRead, status_code=201)
def create_complaint(
    data: ComplaintCreate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(role_required(UserRole.tenant, UserRole.admin)),
):
    complaint = complaint_service.create_complaint(repo, current_user, data)
    return ComplaintRead.model_validate(complaint)


@router.get("/", response_model=List[ComplaintRead])
def list_complaints(
    tenant_id: Optional[uuid.UUID] = None,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    """
    Retrieve complaints with their jobs, newest first.
    Tenants only see their own.
    """
    return complaint_service.list_complaints(repo, current_user, tenant_id)


@router.get("/{complaint_id}", response_model=ComplaintRead)
def get_complaint_by_id(
    complaint_id: uuid.UUID,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    """
    Retrieve a complaint and its jobs by ID.
    """
    complaint = complaint_service.get_complaint(repo, current_user, complaint_id)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")

    return complaint
