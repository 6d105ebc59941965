"""
Error taxonomy shared by every LifeOps app.

Services raise LifeOpsError subclasses; the API layer turns them into
``{"error": message}`` responses with the status carried by the exception
(see apps.core.handlers).
"""
from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION = 'VALIDATION'
    UNAUTHORIZED = 'UNAUTHORIZED'
    FORBIDDEN = 'FORBIDDEN'
    NOT_FOUND = 'NOT_FOUND'
    CONFLICT = 'CONFLICT'
    EXPIRED = 'EXPIRED'
    INTERNAL = 'INTERNAL'


class LifeOpsError(Exception):
    code = ErrorCode.INTERNAL
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationFailed(LifeOpsError):
    code = ErrorCode.VALIDATION
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(LifeOpsError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(LifeOpsError):
    code = ErrorCode.FORBIDDEN
    status_code = 403
    default_message = "Permission denied"


class NotFound(LifeOpsError):
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "Not found"


class Conflict(LifeOpsError):
    code = ErrorCode.CONFLICT
    status_code = 409
    default_message = "Conflict"


class Expired(LifeOpsError):
    code = ErrorCode.EXPIRED
    status_code = 410
    default_message = "Expired"
