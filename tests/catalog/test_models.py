"""Tests for product field validation and parsing."""

from decimal import Decimal

import pytest

from app.catalog.models import (
    ProductCategory,
    ProductData,
    ProductPatch,
    parse_availability,
    parse_price,
    validate_price,
)
from app.domain.exceptions import ValidationError


class TestProductData:
    """Tests for create payload validation."""

    def test_validated_normalizes(self) -> None:
        """Text is trimmed and price rounded to cents."""
        data = ProductData(
            title="  Lamp ",
            description=" Warm light ",
            image=" /uploads/a.png ",
            category="Home & Decor",
            price=Decimal("19.999"),
        ).validated()

        assert data.title == "Lamp"
        assert data.description == "Warm light"
        assert data.image == "/uploads/a.png"
        assert data.price == Decimal("20.00")

    def test_title_too_long(self) -> None:
        """Titles over 200 characters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ProductData(
                title="x" * 201,
                description="d",
                image="i",
                category="Books",
                price=Decimal("1"),
            ).validated()
        assert exc_info.value.field == "title"

    def test_missing_price(self) -> None:
        """Price is required."""
        with pytest.raises(ValidationError) as exc_info:
            ProductData(title="t", description="d", image="i", category="Books", price=None).validated()
        assert exc_info.value.field == "price"

    def test_unknown_category(self) -> None:
        """Category must be one of the fixed set."""
        with pytest.raises(ValidationError) as exc_info:
            ProductData(title="t", description="d", image="i", category="books", price=Decimal("1")).validated()
        assert exc_info.value.field == "category"


class TestProductPatch:
    """Tests for partial updates."""

    def test_changes_only_include_set_fields(self) -> None:
        """Unset fields are omitted."""
        changes = ProductPatch(title=" New ", availability=False).changes()
        assert changes == {"title": "New", "availability": False}

    def test_changes_validate_values(self) -> None:
        """Set fields are validated."""
        with pytest.raises(ValidationError):
            ProductPatch(description="   ").changes()


class TestParsing:
    """Tests for form value parsing."""

    def test_parse_price(self) -> None:
        """Numeric strings parse; blanks mean absent."""
        assert parse_price("12.5") == Decimal("12.5")
        assert parse_price(" ") is None
        assert parse_price(None) is None

    def test_parse_price_rejects_text(self) -> None:
        """Non-numeric prices are validation errors."""
        with pytest.raises(ValidationError):
            parse_price("cheap")

    def test_validate_price_bounds(self) -> None:
        """Negative, infinite and oversized prices are rejected."""
        assert validate_price(Decimal("0")) == Decimal("0.00")
        for value in (Decimal("-0.01"), Decimal("Infinity"), Decimal("NaN"), Decimal("100000000")):
            with pytest.raises(ValidationError):
                validate_price(value)

    def test_parse_availability(self) -> None:
        """Only "true" counts as available."""
        assert parse_availability("true") is True
        assert parse_availability("TRUE") is True
        assert parse_availability("false") is False
        assert parse_availability("yes") is False
        assert parse_availability(None) is None

    def test_category_values_order(self) -> None:
        """Categories keep declaration order."""
        assert ProductCategory.values()[0] == "Clothing"
        assert ProductCategory.values()[-1] == "Toys"
        assert len(ProductCategory.values()) == 9
