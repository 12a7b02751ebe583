"""Product Catalog.

Provides product persistence, slug generation, listing queries and
catalog operations.
"""

from app.catalog.models import Product, ProductCategory, ProductData, ProductPatch
from app.catalog.query import (
    PageInfo,
    PaginatedResult,
    ProductFilter,
    ProductQuery,
    ProductQueryParams,
    ProductSort,
    build_product_query,
)
from app.catalog.repository import ProductRepository
from app.catalog.service import CatalogService
from app.catalog.slugs import generate_unique_slug, slugify

__all__ = [
    # Models
    "Product",
    "ProductCategory",
    "ProductData",
    "ProductPatch",
    # Query
    "PageInfo",
    "PaginatedResult",
    "ProductFilter",
    "ProductQuery",
    "ProductQueryParams",
    "ProductSort",
    "build_product_query",
    # Slugs
    "generate_unique_slug",
    "slugify",
    # Repository
    "ProductRepository",
    # Service
    "CatalogService",
]
