"""Domain error taxonomy.

Use cases raise these; the API layer turns each one into an ``{"error": ...}``
envelope with the class's ``status_code``.
"""

from typing import Any, Optional


class DomainError(Exception):
    """Base class for errors that carry an HTTP status"""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = 400
    default_message = "Validation failed"


class AuthError(DomainError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(DomainError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found"


class StateConflictError(DomainError):
    """Action is not valid for the entity's current state"""

    status_code = 400
    default_message = "Invalid state"


class InsufficientBalanceError(StateConflictError):
    default_message = "Insufficient balance"


class UpstreamError(DomainError):
    """Payment, storage or bot-check provider failed"""

    status_code = 500
    default_message = "Upstream service failure"
