"""Demo catalog used by scripts/seed_catalog.py."""

from dataclasses import dataclass
from decimal import Decimal

from app.catalog.models import ProductCategory, ProductData


@dataclass(frozen=True)
class SeedProduct:
    """A demo product with a remote image to fetch."""

    title: str
    description: str
    category: ProductCategory
    price: Decimal
    image_url: str
    availability: bool = True

    def to_data(self, image: str | None = None) -> ProductData:
        """Build write payload, using image or the remote URL."""
        return ProductData(
            title=self.title,
            description=self.description,
            image=image or self.image_url,
            category=self.category.value,
            price=self.price,
            availability=self.availability,
        )


SEED_PRODUCTS: list[SeedProduct] = [
    SeedProduct(
        title="Sneakers",
        description=(
            "Classic white canvas sneakers with comfortable cushioning and durable "
            "rubber sole. Perfect for everyday casual wear."
        ),
        category=ProductCategory.SHOES,
        price=Decimal("49.00"),
        image_url="https://images.unsplash.com/photo-1549298916-b41d501d3772?w=800&q=80",
    ),
    SeedProduct(
        title="T-Shirt",
        description=(
            "Premium cotton t-shirt in burnt orange color. Soft, breathable fabric "
            "with a relaxed fit for maximum comfort."
        ),
        category=ProductCategory.CLOTHING,
        price=Decimal("13.00"),
        image_url="https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800&q=80",
    ),
    SeedProduct(
        title="Headphones",
        description=(
            "High-quality over-ear wireless headphones with active noise cancellation "
            "and premium sound quality. Up to 30 hours battery life."
        ),
        category=ProductCategory.ELECTRONICS,
        price=Decimal("38.00"),
        image_url="https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=800&q=80",
    ),
    SeedProduct(
        title="Smartphone",
        description=(
            "Latest generation smartphone with stunning display, powerful processor, "
            "and advanced camera system. Available in white."
        ),
        category=ProductCategory.ELECTRONICS,
        price=Decimal("699.00"),
        image_url="https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=800&q=80",
    ),
    SeedProduct(
        title="Watch",
        description=(
            "Elegant minimalist analog watch with black dial and premium leather "
            "strap. Water-resistant and scratch-proof glass."
        ),
        category=ProductCategory.ACCESSORIES,
        price=Decimal("149.00"),
        image_url="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=800&q=80",
    ),
    SeedProduct(
        title="Bag",
        description=(
            "Stylish leather crossbody bag in camel color. Compact design with "
            "adjustable strap and secure magnetic closure."
        ),
        category=ProductCategory.ACCESSORIES,
        price=Decimal("89.00"),
        image_url="https://images.unsplash.com/photo-1548036328-c9fa89d128fa?w=800&q=80",
    ),
    SeedProduct(
        title="Jeans",
        description=(
            "Classic blue denim jeans with comfortable stretch fabric. Modern slim "
            "fit design suitable for any occasion."
        ),
        category=ProductCategory.CLOTHING,
        price=Decimal("59.00"),
        image_url="https://images.unsplash.com/photo-1542272604-787c3835535d?w=800&q=80",
    ),
    SeedProduct(
        title="Laptop",
        description=(
            "Powerful laptop with high-resolution display, fast processor, and "
            "all-day battery life. Perfect for work and entertainment."
        ),
        category=ProductCategory.ELECTRONICS,
        price=Decimal("999.00"),
        image_url="https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=800&q=80",
    ),
    SeedProduct(
        title="Wireless Earbuds",
        description=(
            "High-quality wireless earbuds with noise cancellation and long battery "
            "life. Comfortable fit for extended listening sessions."
        ),
        category=ProductCategory.ELECTRONICS,
        price=Decimal("99.99"),
        image_url="https://images.unsplash.com/photo-1590658268037-6bf12165a8df?w=800&q=80",
    ),
]
