class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class NotFoundError(DomainError):
    """Raised when a staff member or document id is unknown."""


class AuthorizationError(DomainError):
    """Raised when the caller does not own the record it tries to change."""


class StorageError(DomainError):
    """Raised when a blob cannot be written, read or deleted."""


class UpstreamTransportError(Exception):
    """Raised by the chat transport client on network or Bot API failures."""
