class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or a required field is missing."""


class ConflictError(DomainError):
    """Raised when an operation would violate a state-machine rule."""


class NotFoundError(DomainError):
    """Raised when a record does not exist in the expected state."""


class InsufficientBalanceError(DomainError):
    """Raised when the leave admission rule rejects a request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
