"""Custom domain exceptions for the circulation service."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
INVALID_STATE = "INVALID_STATE"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested item or member does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when seeding an item or registering a member would violate a uniqueness constraint."""

    pass


class InvalidStateError(DomainError):
    """Raised when a transition is not allowed from the item's current state."""

    pass


class InvalidArgumentError(DomainError):
    """Raised for unsupported search or report kinds."""

    pass


class UnknownTierError(DomainError):
    """Raised when no policy or fee calculator is registered for a membership tier.

    This is a configuration error, not a user error.
    """

    pass
