"""Error taxonomy raised by the services and rendered by the HTTP layer."""
from __future__ import annotations


class LeaseServiceError(Exception):
    """Base class: carries a human-readable message, a short code and an HTTP status."""

    code = "invalid"
    status_code = 400

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ValidationError(LeaseServiceError):
    """Raised when a required field is missing or blank."""

    code = "validation"
    status_code = 400


class NotFoundError(LeaseServiceError):
    code = "not_found"
    status_code = 404


class AlreadyExistsError(LeaseServiceError):
    """Raised when the email is already registered; ``existing`` holds that user."""

    code = "already_exists"
    status_code = 409

    def __init__(self, message: str, existing=None):
        super().__init__(message)
        self.existing = existing


class RoleViolationError(LeaseServiceError):
    code = "role_violation"
    status_code = 403


class BusinessRuleViolationError(LeaseServiceError):
    code = "business_rule"
    status_code = 409


class LeaseOwnershipError(BusinessRuleViolationError):
    """A customer tried to end somebody else's lease."""

    code = "not_owner"
    status_code = 403
