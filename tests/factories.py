"""Test data builders."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from app.catalog.models import Product

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_product(index: int = 0, **overrides: Any) -> Product:
    """Build a product row; higher index means created later."""
    values: dict[str, Any] = {
        "title": f"Product {index}",
        "description": f"Description for product {index}",
        "image": f"https://example.com/{index}.jpg",
        "category": "Electronics",
        "price": Decimal("10.00") + index,
        "availability": True,
        "slug": f"product-{index}",
        "created_at": BASE_TIME + timedelta(minutes=index),
    }
    values.update(overrides)
    values.setdefault("updated_at", values["created_at"])
    return Product(**values)


ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret123"
ADMIN_NAME = "Test Admin"
