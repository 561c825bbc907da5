"""
Typed application errors

Services raise these; the handlers registered in ``carelink.main`` turn them
into the ``{"status": "error", ...}`` envelope with the matching HTTP status.
"""
import enum
from typing import List, Optional

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Error kinds surfaced to clients"""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_MEMBER = "NOT_MEMBER"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNEXPECTED = "UNEXPECTED"


class CareLinkError(Exception):
    """Base class for every error the API reports on purpose"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = ErrorCode.UNEXPECTED

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> dict:
        body = {
            "status": "error",
            "message": self.message,
            "error": self.code.value,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(CareLinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str = "Validation failed", errors: Optional[List[str]] = None):
        super().__init__(message, errors)


class AuthenticationError(CareLinkError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCode.UNAUTHORIZED


class ForbiddenError(CareLinkError):
    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCode.FORBIDDEN


class NotMemberError(ForbiddenError):
    """Raised when a group-only action is attempted by a non-member"""
    code = ErrorCode.NOT_MEMBER


class NotFoundError(CareLinkError):
    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.NOT_FOUND


class ConflictError(CareLinkError):
    status_code = status.HTTP_409_CONFLICT
    code = ErrorCode.CONFLICT


class UnexpectedError(CareLinkError):
    pass
