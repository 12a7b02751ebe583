"""Tests for the catalog service."""

import io
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import Headers

from app.catalog.models import ProductData, ProductPatch
from app.catalog.query import ProductQueryParams
from app.catalog.repository import ProductRepository
from app.catalog.seed_data import SEED_PRODUCTS
from app.catalog.service import CatalogService
from app.domain.exceptions import NotFoundError, SlugConflictError, ValidationError
from app.infrastructure.storage import ImageStorage

from tests.factories import make_product


def product_data(title: str = "Red Shoes!!", **overrides) -> ProductData:
    """Build valid product fields."""
    values = {
        "title": title,
        "description": "Bright red sneakers",
        "image": "https://example.com/red.jpg",
        "category": "Shoes",
        "price": Decimal("49.00"),
    }
    values.update(overrides)
    return ProductData(**values)


def image_upload(content: bytes = b"\x89PNG fake", content_type: str = "image/png") -> UploadFile:
    """Build an in-memory upload."""
    return UploadFile(
        file=io.BytesIO(content),
        filename="photo.png",
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def service(session: AsyncSession, tmp_path: Path) -> CatalogService:
    """Create service with storage in a temporary directory."""
    return CatalogService(session, storage=ImageStorage(upload_dir=tmp_path))


class TestCreateProduct:
    """Tests for product creation."""

    @pytest.mark.asyncio
    async def test_slugs_follow_title_and_collisions(self, service: CatalogService) -> None:
        """Equal titles get increasing suffixes."""
        first = await service.create_product(product_data("Red Shoes!!"))
        second = await service.create_product(product_data("Red Shoes"))
        third = await service.create_product(product_data("red shoes"))

        assert first.slug == "red-shoes"
        assert second.slug == "red-shoes-1"
        assert third.slug == "red-shoes-2"

    @pytest.mark.asyncio
    async def test_created_product_reads_back(self, service: CatalogService) -> None:
        """The stored product matches the input fields."""
        created = await service.create_product(product_data("Desk Lamp", category="Home & Decor"))

        fetched = await service.get_product(created.slug)

        assert fetched.id == created.id
        assert fetched.title == "Desk Lamp"
        assert fetched.description == "Bright red sneakers"
        assert fetched.image == "https://example.com/red.jpg"
        assert fetched.category == "Home & Decor"
        assert fetched.price == Decimal("49.00")
        assert fetched.availability is True

    @pytest.mark.asyncio
    async def test_trims_title(self, service: CatalogService) -> None:
        """Titles are stored trimmed."""
        product = await service.create_product(product_data("  Blue Hat  "))
        assert product.title == "Blue Hat"
        assert product.slug == "blue-hat"

    @pytest.mark.asyncio
    async def test_requires_image(self, service: CatalogService) -> None:
        """Neither a URL nor a file is an error."""
        with pytest.raises(ValidationError) as exc_info:
            await service.create_product(product_data(image=""))
        assert exc_info.value.field == "image"

    @pytest.mark.asyncio
    async def test_upload_overrides_image_url(
        self, service: CatalogService, tmp_path: Path
    ) -> None:
        """An uploaded file is stored and its path used."""
        product = await service.create_product(
            product_data(image="https://example.com/ignored.jpg"),
            image_upload=image_upload(),
        )

        assert product.image.startswith("/uploads/")
        assert product.image.endswith(".png")
        stored = tmp_path / product.image.rsplit("/", 1)[1]
        assert stored.read_bytes() == b"\x89PNG fake"

    @pytest.mark.asyncio
    async def test_rejects_non_image_upload(self, service: CatalogService) -> None:
        """Only image content types are accepted."""
        with pytest.raises(ValidationError):
            await service.create_product(
                product_data(),
                image_upload=image_upload(b"hello", content_type="text/plain"),
            )

    @pytest.mark.asyncio
    async def test_failed_create_removes_uploaded_image(
        self, service: CatalogService, tmp_path: Path
    ) -> None:
        """No file is left behind when the product is rejected."""
        with pytest.raises(ValidationError):
            await service.create_product(
                product_data(image="", category="Food"),
                image_upload=image_upload(),
            )

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_exhausted_retries_remove_uploaded_image(
        self, service: CatalogService, session: AsyncSession, tmp_path: Path, monkeypatch
    ) -> None:
        """A create that loses every slug race discards its upload."""
        session.add(make_product(1, slug="red-shoes"))
        await session.commit()

        async def never_exists(self, slug, exclude_id=None):
            return False

        monkeypatch.setattr(ProductRepository, "slug_exists", never_exists)

        with pytest.raises(SlugConflictError):
            await service.create_product(product_data("Red Shoes"), image_upload=image_upload())

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_retries_after_write_conflict(
        self, service: CatalogService, session: AsyncSession, monkeypatch
    ) -> None:
        """A slug claimed between the existence check and the insert is looked up again."""
        session.add(make_product(1, slug="red-shoes"))
        await session.commit()

        real_slug_exists = ProductRepository.slug_exists
        calls = {"count": 0}

        async def stale_slug_exists(self, slug, exclude_id=None):
            # First check misses the existing row, as if it was written concurrently
            calls["count"] += 1
            if calls["count"] == 1:
                return False
            return await real_slug_exists(self, slug, exclude_id=exclude_id)

        monkeypatch.setattr(ProductRepository, "slug_exists", stale_slug_exists)

        product = await service.create_product(product_data("Red Shoes"))

        assert product.slug == "red-shoes-1"

    @pytest.mark.asyncio
    async def test_gives_up_after_write_retries(
        self, service: CatalogService, session: AsyncSession, monkeypatch
    ) -> None:
        """Persistent write conflicts surface as a slug conflict."""
        session.add(make_product(1, slug="red-shoes"))
        await session.commit()

        async def never_exists(self, slug, exclude_id=None):
            return False

        monkeypatch.setattr(ProductRepository, "slug_exists", never_exists)

        with pytest.raises(SlugConflictError):
            await service.create_product(product_data("Red Shoes"))


class TestUpdateProduct:
    """Tests for product updates."""

    @pytest.mark.asyncio
    async def test_title_change_regenerates_slug(self, service: CatalogService) -> None:
        """A new title means a new slug; the old one stops resolving."""
        await service.create_product(product_data("Red Shoes"))

        updated = await service.update_product("red-shoes", ProductPatch(title="Blue Shoes"))

        assert updated.slug == "blue-shoes"
        with pytest.raises(NotFoundError):
            await service.get_product("red-shoes")

    @pytest.mark.asyncio
    async def test_same_title_keeps_slug(self, service: CatalogService) -> None:
        """Resubmitting the current title keeps the slug."""
        await service.create_product(product_data("Red Shoes"))
        await service.create_product(product_data("Red Shoes"))

        updated = await service.update_product(
            "red-shoes-1", ProductPatch(title="Red Shoes", price=Decimal("10"))
        )

        assert updated.slug == "red-shoes-1"
        assert updated.price == Decimal("10.00")

    @pytest.mark.asyncio
    async def test_title_change_avoids_other_slugs(self, service: CatalogService) -> None:
        """The regenerated slug skips slugs of other products."""
        await service.create_product(product_data("Blue Shoes"))
        await service.create_product(product_data("Red Shoes"))

        updated = await service.update_product("red-shoes", ProductPatch(title="Blue Shoes"))

        assert updated.slug == "blue-shoes-1"

    @pytest.mark.asyncio
    async def test_failed_update_removes_uploaded_image(
        self, service: CatalogService, tmp_path: Path
    ) -> None:
        """A rejected update discards the replacement image and keeps the old one."""
        await service.create_product(product_data("Red Shoes"))

        with pytest.raises(ValidationError):
            await service.update_product(
                "red-shoes",
                ProductPatch(category="Food"),
                image_upload=image_upload(),
            )

        assert list(tmp_path.iterdir()) == []
        product = await service.get_product("red-shoes")
        assert product.image == "https://example.com/red.jpg"

    @pytest.mark.asyncio
    async def test_unknown_slug(self, service: CatalogService) -> None:
        """Updating a missing product fails."""
        with pytest.raises(NotFoundError):
            await service.update_product("missing", ProductPatch(price=Decimal("1")))

    @pytest.mark.asyncio
    async def test_invalid_patch_value(self, service: CatalogService) -> None:
        """Patched fields are validated."""
        await service.create_product(product_data("Red Shoes"))

        with pytest.raises(ValidationError):
            await service.update_product("red-shoes", ProductPatch(category="Food"))


class TestReads:
    """Tests for product reads."""

    @pytest.mark.asyncio
    async def test_search_products_pages(self, service: CatalogService, session: AsyncSession) -> None:
        """Listing applies defaults and reports pages."""
        session.add_all([make_product(i) for i in range(25)])
        await session.commit()

        result = await service.search_products(ProductQueryParams(page="3"))

        assert result.total == 25
        assert result.pages == 3
        assert [p.slug for p in result.items] == ["product-0"]

    @pytest.mark.asyncio
    async def test_get_related(self, service: CatalogService, session: AsyncSession) -> None:
        """Related products share the category."""
        session.add_all([
            make_product(1, category="Books"),
            make_product(2, category="Books"),
            make_product(3, category="Toys"),
        ])
        await session.commit()

        related = await service.get_related("product-1")

        assert [p.slug for p in related] == ["product-2"]

    @pytest.mark.asyncio
    async def test_get_related_unknown(self, service: CatalogService) -> None:
        """Related lookup for a missing product fails."""
        with pytest.raises(NotFoundError):
            await service.get_related("missing")

    @pytest.mark.asyncio
    async def test_list_categories(self, service: CatalogService) -> None:
        """Categories come back in their fixed order."""
        assert service.list_categories() == [
            "Clothing",
            "Shoes",
            "Accessories",
            "Electronics",
            "Home & Decor",
            "Sports",
            "Books",
            "Beauty",
            "Toys",
        ]


class TestDeleteProduct:
    """Tests for product deletion."""

    @pytest.mark.asyncio
    async def test_delete_frees_slug_for_new_product(self, service: CatalogService) -> None:
        """A deleted product's slug goes to the next product created with that title."""
        await service.create_product(product_data("Red Shoes!!"))
        await service.create_product(product_data("Red Shoes"))

        await service.delete_product("red-shoes")
        recreated = await service.create_product(product_data("Red Shoes"))

        assert recreated.slug == "red-shoes"
        assert (await service.get_product("red-shoes-1")).title == "Red Shoes"

    @pytest.mark.asyncio
    async def test_delete(self, service: CatalogService) -> None:
        """Deleted products are gone."""
        await service.create_product(product_data("Red Shoes"))

        await service.delete_product("red-shoes")

        with pytest.raises(NotFoundError):
            await service.get_product("red-shoes")

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service: CatalogService) -> None:
        """Deleting a missing product fails."""
        with pytest.raises(NotFoundError):
            await service.delete_product("missing")


class TestSeedCatalog:
    """Tests for catalog seeding."""

    @pytest.mark.asyncio
    async def test_seed_replaces_catalog(self, service: CatalogService, session: AsyncSession) -> None:
        """Seeding clears old products and creates the demo set."""
        session.add(make_product(1))
        await session.commit()

        result = await service.seed_catalog([p.to_data() for p in SEED_PRODUCTS])

        assert result["deleted"] == 1
        assert result["products_created"] == len(SEED_PRODUCTS)
        assert "sneakers" in result["slugs"]
        assert len(set(result["slugs"])) == len(SEED_PRODUCTS)
