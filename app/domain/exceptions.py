"""Domain exceptions.

All domain-level errors raised by repositories and services. The API
layer maps each class to an HTTP status and an error code for the
response envelope.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API boundary.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            message: Explanation of what is invalid.
            field: Name of the offending field, if any.
        """
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class UnauthorizedError(DomainError):
    """Raised for missing, invalid or expired credentials."""

    status_code = 401
    error_code = "UNAUTHORIZED"


class NotFoundError(DomainError):
    """Raised when a product or admin does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, key: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "Admin").
            key: Lookup key that matched nothing.
        """
        super().__init__(
            f"{entity_type} not found",
            details={"entity_type": entity_type, "key": key},
        )


class ConflictError(DomainError):
    """Raised when an admin email is already registered."""

    status_code = 400
    error_code = "CONFLICT"


class SlugConflictError(DomainError):
    """Raised when a slug is taken at write time.

    The check for a free slug and the insert are not atomic, so a
    concurrent write can claim the slug in between. Callers may
    check again and retry.
    """

    status_code = 409
    error_code = "SLUG_CONFLICT"

    def __init__(self, slug: str) -> None:
        """Initialize slug conflict error.

        Args:
            slug: The slug that collided.
        """
        super().__init__(
            f"Slug '{slug}' is already in use",
            details={"slug": slug},
        )
        self.slug = slug
