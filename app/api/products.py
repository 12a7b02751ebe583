"""Product API endpoints.

Read endpoints are public; create, update and delete require an admin
bearer token.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import ApiResponse, PaginationSchema, ProductSchema
from app.api.security import require_admin
from app.auth.tokens import Identity
from app.catalog.models import Product, ProductData, ProductPatch, parse_availability, parse_price
from app.catalog.query import ProductQueryParams
from app.catalog.service import CatalogService
from app.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# ============================================================================
# Dependencies
# ============================================================================


def get_service(session: Annotated[AsyncSession, Depends(get_session)]) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


@dataclass
class ImageInput:
    """The form ``image`` field: either an uploaded file or a URL."""

    upload: UploadFile | None = None
    url: str | None = None


async def get_image_input(request: Request) -> ImageInput:
    """Read the ``image`` form field, which may hold a file or text."""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return ImageInput()

    form = await request.form()
    image = form.get("image")
    if isinstance(image, str):
        return ImageInput(url=_text(image))
    if image is not None and image.filename:
        return ImageInput(upload=image)
    return ImageInput()


def _text(value: str | None) -> str | None:
    """Treat empty form values as absent."""
    if value is None or not value.strip():
        return None
    return value


# ============================================================================
# Converters
# ============================================================================


def product_to_schema(product: Product) -> ProductSchema:
    """Convert Product model to response schema."""
    return ProductSchema.model_validate(product)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ApiResponse[list[ProductSchema]],
    response_model_exclude_none=True,
    summary="List products",
    description="Search, filter, sort and paginate products.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_service)],
    search: Annotated[str | None, Query()] = None,
    categories: Annotated[str | None, Query(description="Comma-separated categories")] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> ApiResponse[list[ProductSchema]]:
    """List products.

    Query values are accepted as strings; unparseable paging values
    fall back to defaults rather than failing.
    """
    result = await service.search_products(
        ProductQueryParams(
            search=search,
            categories=categories,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
            page=page,
            limit=limit,
        )
    )

    return ApiResponse(
        data=[product_to_schema(p) for p in result.items],
        pagination=PaginationSchema(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


@router.get(
    "/categories",
    response_model=ApiResponse[list[str]],
    response_model_exclude_none=True,
    summary="List categories",
    description="Get the fixed list of product categories.",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_service)],
) -> ApiResponse[list[str]]:
    """List the fixed category set."""
    return ApiResponse(data=service.list_categories())


@router.get(
    "/{slug}",
    response_model=ApiResponse[ProductSchema],
    response_model_exclude_none=True,
    summary="Get product",
)
async def get_product(
    slug: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ApiResponse[ProductSchema]:
    """Get a product by slug."""
    product = await service.get_product(slug)
    return ApiResponse(data=product_to_schema(product))


@router.get(
    "/{slug}/related",
    response_model=ApiResponse[list[ProductSchema]],
    response_model_exclude_none=True,
    summary="Get related products",
    description="Get up to four newest products from the same category.",
)
async def get_related_products(
    slug: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ApiResponse[list[ProductSchema]]:
    """Get products related to a product."""
    related = await service.get_related(slug)
    return ApiResponse(data=[product_to_schema(p) for p in related])


@router.post(
    "",
    response_model=ApiResponse[ProductSchema],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    description="Create a product from multipart form data with an image file or URL.",
)
async def create_product(
    identity: Annotated[Identity, Depends(require_admin)],
    service: Annotated[CatalogService, Depends(get_service)],
    image_input: Annotated[ImageInput, Depends(get_image_input)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    price: Annotated[str | None, Form()] = None,
    availability: Annotated[str | None, Form()] = None,
) -> ApiResponse[ProductSchema]:
    """Create a product.

    Args:
        identity: Authenticated admin.
        service: Catalog service.
        image_input: Image file or URL from the form.

    Returns:
        Created product.
    """
    availability_flag = parse_availability(availability)

    product = await service.create_product(
        ProductData(
            title=title or "",
            description=description or "",
            image=image_input.url or "",
            category=category or "",
            price=parse_price(price),
            availability=True if availability_flag is None else availability_flag,
        ),
        image_upload=image_input.upload,
        created_by=identity,
    )

    return ApiResponse(
        data=product_to_schema(product),
        message="Product created successfully",
    )


@router.put(
    "/{slug}",
    response_model=ApiResponse[ProductSchema],
    response_model_exclude_none=True,
    summary="Update product",
    description="Update any subset of product fields; the slug follows title changes.",
)
async def update_product(
    slug: str,
    identity: Annotated[Identity, Depends(require_admin)],
    service: Annotated[CatalogService, Depends(get_service)],
    image_input: Annotated[ImageInput, Depends(get_image_input)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    price: Annotated[str | None, Form()] = None,
    availability: Annotated[str | None, Form()] = None,
) -> ApiResponse[ProductSchema]:
    """Update a product.

    Empty form values leave the corresponding field unchanged.
    """
    product = await service.update_product(
        slug,
        ProductPatch(
            title=_text(title),
            description=_text(description),
            image=image_input.url,
            category=_text(category),
            price=parse_price(price),
            availability=parse_availability(_text(availability)),
        ),
        image_upload=image_input.upload,
        updated_by=identity,
    )

    return ApiResponse(
        data=product_to_schema(product),
        message="Product updated successfully",
    )


@router.delete(
    "/{slug}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    summary="Delete product",
)
async def delete_product(
    slug: str,
    identity: Annotated[Identity, Depends(require_admin)],
    service: Annotated[CatalogService, Depends(get_service)],
) -> ApiResponse[None]:
    """Delete a product permanently."""
    await service.delete_product(slug, deleted_by=identity)
    return ApiResponse(message="Product deleted successfully")
