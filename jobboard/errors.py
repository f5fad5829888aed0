# ========================================
# jobboard/errors.py - error taxonomy
# ========================================

from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for errors that map to a structured HTTP response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None

    def to_dict(self) -> dict:
        if self.errors:
            return {"errors": self.errors}
        return {"message": self.message}


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Not authorized, token failed"

    @property
    def headers(self):
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(AppError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Resource already exists"


class Unexpected(AppError):
    status_code = 500
    default_message = "Server error"
