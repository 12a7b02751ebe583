"""Catalog service for product operations.

High-level service that combines repository operations with slug
generation, image storage and listing rules.
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

import structlog
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.tokens import Identity
from app.catalog.models import Product, ProductCategory, ProductData, ProductPatch, validate_title
from app.catalog.query import PaginatedResult, ProductQueryParams, build_product_query
from app.catalog.repository import ProductRepository
from app.catalog.slugs import generate_unique_slug
from app.domain.exceptions import NotFoundError, SlugConflictError, ValidationError
from app.infrastructure.config import settings
from app.infrastructure.storage import ImageStorage

logger = structlog.get_logger()


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)

            results = await service.search_products(
                ProductQueryParams(categories="Shoes,Sports", sort_by="price_asc"),
            )
            product = await service.create_product(
                ProductData(
                    title="Red Shoes",
                    description="Bright red sneakers",
                    image="https://example.com/red.jpg",
                    category="Shoes",
                    price=Decimal("49.00"),
                ),
            )
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: ImageStorage | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            storage: Image storage for uploaded files.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.storage = storage or ImageStorage()

    async def search_products(
        self,
        params: ProductQueryParams,
    ) -> PaginatedResult[Product]:
        """Search products with filters, sorting and pagination.

        Args:
            params: Raw listing parameters.

        Returns:
            Paginated product results.
        """
        query = build_product_query(params)

        items, total = await self.repository.find_all(
            query.filter,
            query.sort,
            skip=query.page.skip,
            limit=query.page.limit,
        )

        return PaginatedResult(
            items=items,
            total=total,
            page=query.page.page,
            limit=query.page.limit,
        )

    async def get_product(self, slug: str) -> Product:
        """Get product by slug.

        Raises:
            NotFoundError: If the slug is unknown.
        """
        product = await self.repository.get_by_slug(slug)
        if product is None:
            raise NotFoundError("Product", slug)
        return product

    async def get_related(self, slug: str) -> Sequence[Product]:
        """Get newest products sharing the category of a product.

        Args:
            slug: Slug of the product being viewed.

        Returns:
            Up to settings.related_limit products, the product itself excluded.

        Raises:
            NotFoundError: If the slug is unknown.
        """
        product = await self.get_product(slug)
        return await self.repository.list_related(
            product.category,
            exclude_id=product.id,
            limit=settings.related_limit,
        )

    def list_categories(self) -> list[str]:
        """Get the fixed category list."""
        return ProductCategory.values()

    async def create_product(
        self,
        data: ProductData,
        image_upload: UploadFile | None = None,
        created_by: Identity | None = None,
    ) -> Product:
        """Create a product with a freshly generated slug.

        An uploaded file takes precedence over an image URL in data. The
        stored file is removed again if the product cannot be written.

        Args:
            data: Product fields.
            image_upload: Optional uploaded image.
            created_by: Admin performing the change, for the audit log.

        Returns:
            Created product.

        Raises:
            ValidationError: If a field is missing or invalid.
            SlugConflictError: If every write attempt lost a slug race.
        """
        if image_upload is None and not (data.image or "").strip():
            raise ValidationError("Image is required", field="image")

        stored_image = None
        if image_upload is not None:
            stored_image = await self.storage.save(image_upload)
            data = replace(data, image=stored_image)

        try:
            product = await self._insert_product(data.validated())
        except Exception:
            if stored_image is not None:
                self.storage.discard(stored_image)
            raise

        logger.info(
            "Product created",
            product_id=product.id,
            slug=product.slug,
            admin_id=created_by.id if created_by else None,
        )
        return product

    async def _insert_product(self, data: ProductData) -> Product:
        """Insert and commit, regenerating the slug after a write conflict."""
        retries = settings.slug_write_retries

        for attempt in range(1, retries + 1):
            slug = await generate_unique_slug(self.repository, data.title)
            try:
                product = await self.repository.create(data, slug)
            except SlugConflictError:
                if attempt == retries:
                    raise
                logger.warning("Slug write conflict, retrying", slug=slug, attempt=attempt)
                continue

            await self.session.commit()
            return product

        raise SlugConflictError(data.title)

    async def update_product(
        self,
        slug: str,
        patch: ProductPatch,
        image_upload: UploadFile | None = None,
        updated_by: Identity | None = None,
    ) -> Product:
        """Update a product; the slug changes only when the title does.

        Args:
            slug: Current product slug.
            patch: Fields to change.
            image_upload: Optional replacement image, removed again if the
                update fails.
            updated_by: Admin performing the change, for the audit log.

        Returns:
            Updated product.

        Raises:
            NotFoundError: If the slug is unknown.
            ValidationError: If a field is invalid.
            SlugConflictError: If every write attempt lost a slug race.
        """
        if await self.repository.get_by_slug(slug) is None:
            raise NotFoundError("Product", slug)

        stored_image = None
        if image_upload is not None:
            stored_image = await self.storage.save(image_upload)
            patch = replace(patch, image=stored_image)

        try:
            updated = await self._apply_update(slug, patch)
        except Exception:
            if stored_image is not None:
                self.storage.discard(stored_image)
            raise

        logger.info(
            "Product updated",
            product_id=updated.id,
            old_slug=slug,
            slug=updated.slug,
            admin_id=updated_by.id if updated_by else None,
        )
        return updated

    async def _apply_update(self, slug: str, patch: ProductPatch) -> Product:
        """Update and commit, regenerating the slug after a write conflict."""
        # Raises ValidationError before any slug lookup
        patch.changes()
        retries = settings.slug_write_retries

        for attempt in range(1, retries + 1):
            # A conflict rolls the session back, so reload on every attempt
            product = await self.repository.get_by_slug(slug)
            if product is None:
                raise NotFoundError("Product", slug)

            new_slug = None
            if patch.title is not None:
                title = validate_title(patch.title)
                if title != product.title:
                    new_slug = await generate_unique_slug(
                        self.repository, title, exclude_id=product.id
                    )

            try:
                updated = await self.repository.update(slug, patch, new_slug=new_slug)
            except SlugConflictError:
                if attempt == retries:
                    raise
                logger.warning(
                    "Slug write conflict, retrying",
                    slug=new_slug,
                    attempt=attempt,
                )
                continue

            await self.session.commit()
            return updated

        raise SlugConflictError(slug)

    async def delete_product(self, slug: str, deleted_by: Identity | None = None) -> None:
        """Delete a product.

        Raises:
            NotFoundError: If the slug is unknown.
        """
        if not await self.repository.delete(slug):
            raise NotFoundError("Product", slug)
        await self.session.commit()
        logger.info(
            "Product deleted",
            slug=slug,
            admin_id=deleted_by.id if deleted_by else None,
        )

    async def seed_catalog(
        self,
        products: Sequence[ProductData],
        clear_existing: bool = True,
    ) -> dict[str, Any]:
        """Seed the product catalog.

        Args:
            products: Products to create, images already resolved.
            clear_existing: Whether to delete existing products first.

        Returns:
            Seeding result with counts.
        """
        deleted = 0
        if clear_existing:
            deleted = await self.repository.delete_all()

        created = []
        for data in products:
            valid = data.validated()
            slug = await generate_unique_slug(self.repository, valid.title)
            created.append(await self.repository.create(valid, slug))

        await self.session.commit()

        logger.info("Catalog seeded", deleted=deleted, created=len(created))

        return {
            "deleted": deleted,
            "products_created": len(created),
            "categories_used": len({p.category for p in created}),
            "slugs": [p.slug for p in created],
        }
