"""
Application errors.

Services raise these; ``main.py`` turns them into JSON responses with the
matching status code. Nothing here is retried.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(AppError):
    """A referenced complaint, job or tenant does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class ValidationFailure(AppError):
    """Malformed or missing input caught by the service layer."""

    status_code = 422
    code = "VALIDATION_FAILED"


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTHENTICATION_FAILED"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class StorageError(AppError):
    """The entity store failed; the surrounding transaction was rolled back."""

    status_code = 500
    code = "STORAGE_FAILURE"
