"""Slug generation for products.

Slugs are lowercase, ASCII, hyphen-delimited identifiers derived from
the product title. Collisions are resolved with a numeric suffix:
``red-shoes``, ``red-shoes-1``, ``red-shoes-2``, ...
"""

import re
import unicodedata
from typing import TYPE_CHECKING

from app.domain.exceptions import SlugConflictError
from app.infrastructure.config import settings

if TYPE_CHECKING:
    from app.catalog.repository import ProductRepository

FALLBACK_SLUG = "product"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Normalize a title to a base slug.

    Args:
        title: Human-readable title.

    Returns:
        Base slug; "product" if nothing usable remains.
    """
    ascii_title = (
        unicodedata.normalize("NFKD", title)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return _NON_ALNUM.sub("-", ascii_title).strip("-") or FALLBACK_SLUG


async def generate_unique_slug(
    repository: "ProductRepository",
    title: str,
    exclude_id: str | None = None,
    max_attempts: int | None = None,
) -> str:
    """Find the first free slug for a title.

    The result is free at the moment of the check only; the unique index
    on products.slug decides at write time.

    Args:
        repository: Product repository used to check existence.
        title: Title to derive the slug from.
        exclude_id: Product being edited, ignored when probing.
        max_attempts: Upper bound on existence checks (defaults to settings).

    Returns:
        Unused slug.

    Raises:
        SlugConflictError: If no free slug was found within the bound.
    """
    base = slugify(title)
    attempts = max_attempts or settings.slug_max_attempts

    candidate = base
    for counter in range(1, attempts + 1):
        if not await repository.slug_exists(candidate, exclude_id=exclude_id):
            return candidate
        candidate = f"{base}-{counter}"

    raise SlugConflictError(base)
