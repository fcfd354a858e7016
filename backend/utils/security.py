import uuid
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from core.config import settings
from core.exceptions import AuthenticationError, ForbiddenError
from models.user import UserRole
from schemas.auth import Principal

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_BCRYPT_ROUNDS,
)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        # Unknown or corrupt hash format
        return False


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"role": principal.role.value, "exp": expire}
    if principal.subject_id:
        claims["sub"] = str(principal.subject_id)
    if principal.tenant_id:
        claims["tenant_id"] = str(principal.tenant_id)
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return Principal(
            role=UserRole(payload["role"]),
            subject_id=uuid.UUID(payload["sub"]) if payload.get("sub") else None,
            tenant_id=uuid.UUID(payload["tenant_id"]) if payload.get("tenant_id") else None,
        )
    except (JWTError, KeyError, ValueError) as e:
        logger.info("Rejected access token: %s", e)
        raise AuthenticationError("Could not validate credentials")


def require_role(principal: Principal, *roles: UserRole):
    if principal.role not in roles:
        raise ForbiddenError("Not authorized")


# FastAPI dependencies

def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Principal:
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return decode_access_token(credentials.credentials)


def role_required(*roles: UserRole):
    def dependency(current_user: Principal = Depends(get_current_user)) -> Principal:
        require_role(current_user, *roles)
        return current_user

    return dependency


admin_required = role_required(UserRole.admin)
supervisor_required = role_required(UserRole.supervisor)
