class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class IllegalTransitionError(DomainError):
    """Raised when a leave request that already left pending is decided again."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(Exception):
    """Base exception for persistence failures."""


class StaleTableError(StoreError):
    """Raised when a table changed underneath a transaction before commit."""
