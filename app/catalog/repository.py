"""Product repository for database operations.

Provides CRUD operations for products with filtering, sorting and
pagination.
"""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product, ProductData, ProductPatch
from app.catalog.query import ProductFilter, ProductSort
from app.domain.exceptions import NotFoundError, SlugConflictError

logger = structlog.get_logger()


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products, total = await repo.find_all(
                ProductFilter(categories=["Shoes"], max_price=Decimal("100")),
                ProductSort.PRICE_ASC,
                skip=0,
                limit=12,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_all(
        self,
        filters: ProductFilter,
        sort: ProductSort,
        skip: int = 0,
        limit: int = 12,
    ) -> tuple[list[Product], int]:
        """Find a page of products and the total under the same filter.

        The page and the count are two separate reads.

        Args:
            filters: Filter predicate.
            sort: Sort order.
            skip: Number of matching rows to skip.
            limit: Maximum rows to return.

        Returns:
            Tuple of (page items, total matching count).
        """
        conditions = self._build_conditions(filters)

        query = select(Product)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(*self._get_order_by(sort)).offset(skip).limit(limit)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        count_query = select(func.count(Product.id))
        if conditions:
            count_query = count_query.where(and_(*conditions))
        total = (await self.session.execute(count_query)).scalar_one()

        return items, total

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(select(Product).where(Product.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether a slug is taken.

        Args:
            slug: Slug to check.
            exclude_id: Product ID to ignore (the one being edited).

        Returns:
            True if another product uses the slug.
        """
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def create(self, data: ProductData, slug: str) -> Product:
        """Insert a new product.

        Args:
            data: Product fields.
            slug: Slug to assign.

        Returns:
            Created product.

        Raises:
            ValidationError: If a field is missing or invalid.
            SlugConflictError: If the slug was claimed concurrently.
        """
        valid = data.validated()
        product = Product(
            title=valid.title,
            description=valid.description,
            image=valid.image,
            category=valid.category,
            price=valid.price,
            availability=valid.availability,
            slug=slug,
        )
        self.session.add(product)
        await self._flush_or_conflict(slug)
        return product

    async def update(
        self,
        slug: str,
        patch: ProductPatch,
        new_slug: str | None = None,
    ) -> Product:
        """Apply a partial update to a product.

        Args:
            slug: Current slug of the product.
            patch: Fields to change.
            new_slug: Replacement slug, when the title changed.

        Returns:
            Updated product.

        Raises:
            NotFoundError: If no product has the slug.
            ValidationError: If a patched field is invalid.
            SlugConflictError: If new_slug was claimed concurrently.
        """
        product = await self.get_by_slug(slug)
        if product is None:
            raise NotFoundError("Product", slug)

        for name, value in patch.changes().items():
            setattr(product, name, value)
        if new_slug is not None:
            product.slug = new_slug

        await self._flush_or_conflict(product.slug)
        await self.session.refresh(product)
        return product

    async def delete(self, slug: str) -> bool:
        """Hard-delete a product.

        Args:
            slug: Product slug.

        Returns:
            True if a product was deleted, False if none matched.
        """
        result = await self.session.execute(delete(Product).where(Product.slug == slug))
        return result.rowcount > 0

    async def list_related(
        self,
        category: str,
        exclude_id: str,
        limit: int = 4,
    ) -> Sequence[Product]:
        """Get newest products of the same category.

        Args:
            category: Category to match.
            exclude_id: Product to leave out.
            limit: Maximum results.

        Returns:
            Related products, newest first.
        """
        query = (
            select(Product)
            .where(and_(Product.category == category, Product.id != exclude_id))
            .order_by(Product.created_at.desc(), Product.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def save_all(self, products: list[Product]) -> list[Product]:
        """Save multiple products to database.

        Args:
            products: Products to save.

        Returns:
            Saved products.
        """
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def delete_all(self) -> int:
        """Delete every product.

        Returns:
            Number of deleted products.
        """
        result = await self.session.execute(delete(Product))
        return result.rowcount

    async def _flush_or_conflict(self, slug: str) -> None:
        """Flush pending changes, turning a unique violation into a conflict.

        The session is rolled back on conflict, so callers must reload
        anything they still need.
        """
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.warning("Slug unique constraint violated", slug=slug)
            raise SlugConflictError(slug) from None

    def _build_conditions(self, filters: ProductFilter) -> list[Any]:
        """Translate a ProductFilter into SQLAlchemy conditions."""
        conditions: list[Any] = []

        if filters.search:
            conditions.append(Product.title.icontains(filters.search, autoescape=True))

        if filters.categories:
            conditions.append(Product.category.in_(filters.categories))

        if filters.min_price is not None:
            conditions.append(Product.price >= filters.min_price)

        if filters.max_price is not None:
            conditions.append(Product.price <= filters.max_price)

        return conditions

    def _get_order_by(self, sort: ProductSort) -> tuple[Any, ...]:
        """Get ORDER BY clauses for a sort option."""
        columns = {
            ProductSort.PRICE_ASC: Product.price.asc(),
            ProductSort.PRICE_DESC: Product.price.desc(),
            ProductSort.NEWEST: Product.created_at.desc(),
        }
        return columns[sort], Product.id.asc()
