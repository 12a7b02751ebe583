"""Product query building.

Turns raw listing parameters (as received in a query string) into a
filter, a sort order and paging information. Unparseable values fall
back to defaults instead of failing the request.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Generic, TypeVar

from app.infrastructure.config import settings

T = TypeVar("T")


class ProductSort(str, Enum):
    """Supported listing orders."""

    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"

    @classmethod
    def parse(cls, value: str | None) -> "ProductSort":
        """Map a sortBy value to an order; unknown values mean newest first."""
        if value == cls.PRICE_ASC.value:
            return cls.PRICE_ASC
        if value == cls.PRICE_DESC.value:
            return cls.PRICE_DESC
        return cls.NEWEST


@dataclass
class ProductQueryParams:
    """Recognized listing parameters, exactly as received.

    Attributes:
        search: Title substring.
        categories: Comma-separated category names.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
        sort_by: "price_asc", "price_desc" or anything else.
        page: 1-indexed page number.
        limit: Page size.
    """

    search: str | None = None
    categories: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    sort_by: str | None = None
    page: str | None = None
    limit: str | None = None


@dataclass
class ProductFilter:
    """Filter predicate for product listing.

    Attributes:
        search: Case-insensitive title substring.
        categories: Allowed categories (OR).
        min_price: Inclusive minimum price.
        max_price: Inclusive maximum price.
    """

    search: str | None = None
    categories: list[str] = field(default_factory=list)
    min_price: Decimal | None = None
    max_price: Decimal | None = None


@dataclass
class PageInfo:
    """Paging window.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
    """

    page: int = 1
    limit: int = 12

    @property
    def skip(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class ProductQuery:
    """Everything the repository needs to run a listing."""

    filter: ProductFilter
    sort: ProductSort
    page: PageInfo


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count under the filter.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.limit) if self.limit else 0


def build_product_query(params: ProductQueryParams) -> ProductQuery:
    """Build filter, sort and paging from listing parameters.

    Args:
        params: Raw listing parameters.

    Returns:
        Composed product query.
    """
    search = (params.search or "").strip() or None

    categories = [
        name.strip()
        for name in (params.categories or "").split(",")
        if name.strip()
    ]

    limit = _parse_positive_int(params.limit, settings.default_page_size)

    return ProductQuery(
        filter=ProductFilter(
            search=search,
            categories=categories,
            min_price=_parse_price_bound(params.min_price),
            max_price=_parse_price_bound(params.max_price),
        ),
        sort=ProductSort.parse(params.sort_by),
        page=PageInfo(
            page=_parse_positive_int(params.page, 1),
            limit=min(limit, settings.max_page_size),
        ),
    )


def _parse_positive_int(value: str | None, default: int) -> int:
    """Parse a positive integer, falling back to default.

    The whole value must be an integer: "2.5" and "2abc" are treated as
    non-numeric and give the default, as do zero and negative numbers.
    """
    try:
        number = int((value or "").strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def _parse_price_bound(value: str | None) -> Decimal | None:
    """Parse a price bound; blank, non-numeric or negative means no bound."""
    if not value or not value.strip():
        return None
    try:
        bound = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not bound.is_finite() or bound < 0:
        return None
    return bound
