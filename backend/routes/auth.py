from fastapi import APIRouter, Depends
from core.database import get_repository
from core.exceptions import AuthenticationError
from repositories.base import Repository
from schemas.auth import Principal, StaffLogin, TenantCreate, TenantLogin, TenantRead, Token
from services import tenants as tenant_service
from utils.security import create_access_token, get_current_user

router = APIRouter(tags=["Auth"])


def issue_token(principal: Principal) -> Token:
    return Token(
        access_token=create_access_token(principal),
        role=principal.role,
        tenant_id=principal.tenant_id,
    )


@router.post("/tenants/signup", response_model=TenantRead, status_code=201)
def signup_tenant(data: TenantCreate, repo: Repository = Depends(get_repository)):
    tenant = tenant_service.create_tenant(repo, data)
    return TenantRead.model_validate(tenant)


@router.post("/tenants/login", response_model=Token)
def login_tenant(data: TenantLogin, repo: Repository = Depends(get_repository)):
    tenant = tenant_service.authenticate_tenant(repo, data.mobile_no, data.password)
    if not tenant:
        raise AuthenticationError("Invalid mobile number or password")
    return issue_token(tenant_service.tenant_principal(tenant))


# Admin and supervisor login
@router.post("/login", response_model=Token)
def login_staff(data: StaffLogin, repo: Repository = Depends(get_repository)):
    user = tenant_service.authenticate_user(repo, data.username, data.password)
    if not user:
        raise AuthenticationError("Invalid username or password")
    return issue_token(tenant_service.user_principal(user))


@router.get("/me", response_model=Principal)
def read_current_user(current_user: Principal = Depends(get_current_user)):
    return current_user
