"""Domain errors surfaced to API callers."""

from typing import Any


class AppError(Exception):
    """Base error carrying the HTTP status and a machine-readable code."""

    status_code = 400
    code = "BUSINESS_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationFailed(AppError):
    status_code = 400
    code = "VALIDATION_FAILED"


class WorkflowError(ValidationFailed):
    """Illegal application status transition."""

    code = "INVALID_TRANSITION"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"


class DeliveryFailed(AppError):
    """Outbound mail could not be handed to the SMTP server."""

    status_code = 502
    code = "DELIVERY_FAILED"
