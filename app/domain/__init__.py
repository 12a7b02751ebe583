"""Domain layer - error taxonomy shared by the catalog and auth packages.

Example usage:
    from app.domain import NotFoundError

    raise NotFoundError("Product", slug)
"""

from app.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    SlugConflictError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "SlugConflictError",
    "UnauthorizedError",
    "ValidationError",
]
