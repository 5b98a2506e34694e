"""
Application error kinds.

Services raise these; the handlers registered in ``app.utils.error_handlers``
turn them into JSON responses of the form ``{"detail": ..., "error": ...}``.
"""
from typing import Optional


class AppError(Exception):
    status_code = 500
    error = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    error = "validation_error"
    default_message = "Invalid input"

    def __init__(self, message: Optional[str] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class AuthError(AppError):
    """Missing/invalid credentials (401) or insufficient role (403)"""
    status_code = 401
    error = "auth_error"
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None, forbidden: bool = False):
        if forbidden:
            self.status_code = 403
            message = message or "Forbidden"
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409
    error = "conflict"
    default_message = "Resource already exists"


class NotFoundError(AppError):
    status_code = 404
    error = "not_found"
    default_message = "Not found"


class InternalError(AppError):
    pass
