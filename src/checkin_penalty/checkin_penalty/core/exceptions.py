class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced event, ledger or user record does not exist."""


class TransientStoreError(DomainError):
    """Raised on a write conflict or I/O failure that is safe to retry."""


class NotificationError(DomainError):
    """Raised when a push notification could not be delivered."""
