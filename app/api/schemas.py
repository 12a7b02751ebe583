"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
Every endpoint answers with the same envelope:
``{success, data?, message?, error?, pagination?}``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# ============================================================================
# Envelope
# ============================================================================


class PaginationSchema(BaseModel):
    """Paging metadata for list responses."""

    page: int = Field(..., description="Current page number (1-based)")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of matching items")
    pages: int = Field(..., description="Total number of pages")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope.

    Routes serialize with exclude_none, so unset keys are omitted.
    """

    success: bool = Field(default=True, description="Whether the request succeeded")
    data: T | None = Field(default=None, description="Response payload")
    message: str | None = Field(default=None, description="Human-readable message")
    error: str | None = Field(default=None, description="Machine-readable error code")
    pagination: PaginationSchema | None = Field(default=None, description="Paging metadata")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product representation."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(..., description="Unique product identifier")
    title: str = Field(..., description="Product title")
    description: str = Field(..., description="Product description")
    image: str = Field(..., description="Image URL or /uploads path")
    category: str = Field(..., description="Product category")
    price: Decimal = Field(..., description="Price")
    availability: bool = Field(..., description="Whether the product is available")
    slug: str = Field(..., description="Unique URL identifier")
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last updated")

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        """Render price as a JSON number."""
        return float(price)


# ============================================================================
# Auth Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Admin login credentials."""

    email: str = Field(..., description="Admin email")
    password: str = Field(..., description="Admin password")


class RegisterRequest(BaseModel):
    """Admin registration request."""

    email: str = Field(..., description="Admin email")
    password: str = Field(..., description="Password (min 6 characters)")
    name: str = Field(..., description="Display name")


class AdminSchema(BaseModel):
    """Public admin profile (never includes the password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Admin identifier")
    email: str = Field(..., description="Admin email")
    name: str = Field(..., description="Display name")


class AuthData(BaseModel):
    """Token issued at login or registration."""

    token: str = Field(..., description="Bearer token")
    admin: AdminSchema = Field(..., description="Authenticated admin")


# ============================================================================
# Health Schemas
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
