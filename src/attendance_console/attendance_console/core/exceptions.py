class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a payload cannot be turned into a domain record at all."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class SpreadsheetError(DomainError):
    """Raised when an uploaded attendance sheet cannot be read."""
