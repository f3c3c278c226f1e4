# consulta_prod/core/exceptions.py
"""Application error taxonomy.

Services raise these; the handlers registered in ``create_app`` turn each one
into a JSON response carrying only ``{"detail": message}`` and the matching
HTTP status.
"""

from typing import Dict, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request data"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.field = field
        if field and message is None:
            message = f"Invalid value for field '{field}'"
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Authentication required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource already exists"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal Server Error"
