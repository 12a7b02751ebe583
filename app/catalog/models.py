"""SQLAlchemy models and write payloads for the product catalog.

Defines the Product table, the closed category set, and the field
validation applied before any product write.
"""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.exceptions import ValidationError
from app.infrastructure.database import Base

TITLE_MAX_LENGTH = 200

# Numeric(10, 2) holds at most eight integer digits
PRICE_LIMIT = Decimal("100000000")


class ProductCategory(str, Enum):
    """Closed set of product categories."""

    CLOTHING = "Clothing"
    SHOES = "Shoes"
    ACCESSORIES = "Accessories"
    ELECTRONICS = "Electronics"
    HOME_DECOR = "Home & Decor"
    SPORTS = "Sports"
    BOOKS = "Books"
    BEAUTY = "Beauty"
    TOYS = "Toys"

    @classmethod
    def values(cls) -> list[str]:
        """Get category names in declaration order."""
        return [category.value for category in cls]


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        title: Product title (max 200 characters).
        description: Product description.
        image: Absolute image URL or relative storage path.
        category: One of ProductCategory values.
        price: Non-negative price.
        availability: Whether the product can be bought.
        slug: Unique URL identifier derived from the title.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, index=True)
    availability: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"


# ============================================================================
# Write payloads
# ============================================================================


@dataclass
class ProductData:
    """Fields required to create a product (slug is assigned separately)."""

    title: str
    description: str
    image: str
    category: str
    price: Decimal | None
    availability: bool = True

    def validated(self) -> "ProductData":
        """Return a normalized copy or raise ValidationError."""
        return ProductData(
            title=validate_title(self.title),
            description=validate_required_text(self.description, "description"),
            image=validate_required_text(self.image, "image"),
            category=validate_category(self.category),
            price=validate_price(self.price),
            availability=bool(self.availability),
        )


@dataclass
class ProductPatch:
    """Partial update; None means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    category: str | None = None
    price: Decimal | None = None
    availability: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Get validated values for the fields that are set."""
        validators = {
            "title": validate_title,
            "description": lambda v: validate_required_text(v, "description"),
            "image": lambda v: validate_required_text(v, "image"),
            "category": validate_category,
            "price": validate_price,
            "availability": bool,
        }
        result: dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                result[field.name] = validators[field.name](value)
        return result


# ============================================================================
# Field validation
# ============================================================================


def validate_title(value: str | None) -> str:
    """Trim and check a product title."""
    title = validate_required_text(value, "title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
            field="title",
        )
    return title


def validate_required_text(value: str | None, field: str) -> str:
    """Trim a required text field and reject blanks."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return text


def validate_category(value: str | None) -> str:
    """Check that a category belongs to the closed set."""
    if value not in ProductCategory.values():
        raise ValidationError(
            f"Category must be one of: {', '.join(ProductCategory.values())}",
            field="category",
        )
    return value


def validate_price(value: Decimal | None) -> Decimal:
    """Check that a price is present, finite and non-negative."""
    if value is None:
        raise ValidationError("Price is required", field="price")
    if not value.is_finite():
        raise ValidationError("Price must be a number", field="price")
    if value < 0:
        raise ValidationError("Price cannot be negative", field="price")
    if value >= PRICE_LIMIT:
        raise ValidationError(f"Price must be below {PRICE_LIMIT}", field="price")
    return value.quantize(Decimal("0.01"))


def parse_price(value: str | float | Decimal | None) -> Decimal | None:
    """Parse a price from form or JSON input.

    Returns:
        The price as Decimal, or None when no value was given.

    Raises:
        ValidationError: If the value is not a number.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Price must be a number", field="price") from None


def parse_availability(value: str | bool | None) -> bool | None:
    """Parse an availability flag; only "true"/True count as available."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return value.strip().lower() == "true"
