from typing import List
from fastapi import APIRouter, Depends
from core.database import get_repository
from repositories.base import Repository
from schemas.auth import Principal
from schemas.reference import MaterialRead, StaffRead
from services import reference as reference_service
from utils.security import admin_required, get_current_user

router = APIRouter(tags=["Reference"])


@router.get("/materials", response_model=List[MaterialRead])
def list_materials(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    return reference_service.list_materials(repo)


@router.get("/staff", response_model=List[StaffRead])
def list_staff(
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    """Active staff only, ordered by name."""
    return reference_service.list_active_staff(repo)


@router.post("/materials/import")
def import_materials(
    materials: List[MaterialRead],
    repo: Repository = Depends(get_repository),
    admin: Principal = Depends(admin_required),
):
    count = reference_service.import_materials(repo, materials)
    return {"message": "Materials imported successfully", "count": count}
