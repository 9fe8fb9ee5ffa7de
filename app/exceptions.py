from typing import Any, Mapping, Optional


class CoachDeskError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Error"
    default_code = "ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(CoachDeskError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class NotFoundError(CoachDeskError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(CoachDeskError):
    """Raised when a resource conflict occurs (e.g., duplicate email)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class UnauthorizedError(CoachDeskError):
    """Raised when authentication fails or is missing."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(CoachDeskError):
    """Raised when an authenticated user lacks the role or ownership for an action."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"
