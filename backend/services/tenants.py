import logging
from typing import Optional
from core.exceptions import ConflictError, ValidationFailure
from models.audit_log import AuditAction
from models.tenant import Tenant
from models.user import STAFF_ROLES, User, UserRole
from repositories.base import Repository
from schemas.auth import Principal, TenantCreate
from services.audit import log_action
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def create_tenant(repo: Repository, data: TenantCreate) -> Tenant:
    """Register a tenant. The password is stored as a bcrypt hash only."""
    password = data.password
    mobile_no = data.mobile_no.strip()
    if not mobile_no or not data.room_no.strip():
        raise ValidationFailure("Mobile number and room number are required")
    if len(password) < 6:
        raise ValidationFailure("Password must be at least 6 characters", {"field": "password"})

    with repo.transaction():
        if repo.get_tenant_by_mobile(mobile_no):
            raise ConflictError("Mobile number already registered")

        tenant = Tenant(
            mobile_no=mobile_no,
            building_name=data.building_name,
            room_no=data.room_no.strip(),
            password_hash=hash_password(password),
        )
        repo.add_tenant(tenant)
        log_action(
            repo,
            performed_by=Principal(role=UserRole.tenant, subject_id=tenant.id, tenant_id=tenant.id),
            action=AuditAction.REGISTERED_TENANT,
            details=f"Tenant {mobile_no} registered for {data.building_name.value} room {tenant.room_no}",
        )

    return tenant


def authenticate_tenant(repo: Repository, mobile_no: str, raw_password: str) -> Optional[Tenant]:
    tenant = repo.get_tenant_by_mobile(mobile_no.strip())
    if tenant is None or not verify_password(raw_password, tenant.password_hash):
        logger.info("Failed tenant login for %s", mobile_no)
        return None
    return tenant


def authenticate_user(repo: Repository, username: str, raw_password: str) -> Optional[User]:
    user = repo.get_user_by_username(username.strip())
    if user is None or user.role not in STAFF_ROLES or not verify_password(raw_password, user.password_hash):
        logger.info("Failed staff login for %s", username)
        return None
    return user


def create_user(repo: Repository, username: str, raw_password: str, role: UserRole) -> User:
    if role not in STAFF_ROLES:
        raise ValidationFailure(f"Staff accounts cannot have role {role.value}")

    with repo.transaction():
        if repo.get_user_by_username(username):
            raise ConflictError("Username already exists")
        user = User(username=username, password_hash=hash_password(raw_password), role=role)
        repo.add_user(user)

    return user


def tenant_principal(tenant: Tenant) -> Principal:
    return Principal(role=UserRole.tenant, subject_id=tenant.id, tenant_id=tenant.id)


def user_principal(user: User) -> Principal:
    return Principal(role=user.role, subject_id=user.id)
