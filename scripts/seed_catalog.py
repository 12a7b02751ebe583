#!/usr/bin/env python3
"""Seed product catalog script.

Replaces the catalog with the demo products. Each product image is
downloaded into the upload directory unless --no-download is given, in
which case the remote URLs are stored as is.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --no-download
    python scripts/seed_catalog.py --no-clear
"""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import uuid4

import httpx

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.models import ProductData
from app.catalog.seed_data import SEED_PRODUCTS, SeedProduct
from app.catalog.service import CatalogService
from app.infrastructure.database import async_session_factory, create_tables
from app.infrastructure.storage import ALLOWED_CONTENT_TYPES, ImageStorage

DOWNLOAD_TIMEOUT = 30.0


async def download_image(
    client: httpx.AsyncClient,
    storage: ImageStorage,
    product: SeedProduct,
) -> str:
    """Fetch a product image and store it locally.

    Args:
        client: HTTP client.
        storage: Target image storage.
        product: Seed product with a remote image URL.

    Returns:
        Local image path.

    Raises:
        httpx.HTTPError: If the download fails.
        ValueError: If the response is not a supported image.
    """
    response = await client.get(product.image_url)
    response.raise_for_status()

    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    extension = ALLOWED_CONTENT_TYPES.get(content_type)
    if extension is None:
        raise ValueError(f"unsupported content type {content_type!r}")

    return storage.save_bytes(response.content, f"{uuid4().hex}{extension}")


async def resolve_images(download: bool) -> list[ProductData]:
    """Build product payloads, downloading images when requested.

    A failed download falls back to the remote URL.
    """
    if not download:
        return [product.to_data() for product in SEED_PRODUCTS]

    storage = ImageStorage()
    products = []
    async with httpx.AsyncClient(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as client:
        for product in SEED_PRODUCTS:
            try:
                image = await download_image(client, storage, product)
                print(f"  ✓ {product.title}: {image}")
            except (httpx.HTTPError, ValueError) as e:
                image = None
                print(f"  ✗ {product.title}: keeping remote URL ({e})")
            products.append(product.to_data(image))
    return products


async def seed(products: list[ProductData], clear: bool = True) -> dict:
    """Seed the catalog.

    Args:
        products: Products to create.
        clear: Whether to clear existing products.

    Returns:
        Seeding result.
    """
    async with async_session_factory() as session:
        service = CatalogService(session)
        return await service.seed_catalog(products, clear_existing=clear)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo products",
    )
    parser.add_argument(
        "--no-download",
        action="store_true",
        help="Store remote image URLs instead of downloading the images",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Download images: {not args.no_download}")
    print(f"Clear existing: {not args.no_clear}")
    print()

    # Create tables
    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    if not args.no_download:
        print("Downloading images...")
    products = await resolve_images(download=not args.no_download)
    print()

    print("Seeding catalog...")
    result = await seed(products, clear=not args.no_clear)

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Created: {result['products_created']} products")
    print(f"  ✓ Categories: {result['categories_used']}")
    for slug in result["slugs"]:
        print(f"    - {slug}")
    print()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
