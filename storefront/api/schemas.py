"""API schemas for the storefront API.

Pydantic models for response serialization. JSON keys are camelCase
(``perPage``, ``updatedAt``, ``compareAt``); request payloads live in
``storefront.catalog.inputs``.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(ApiModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number (1-based)")
    per_page: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages (at least 1)")


class CreatedResponse(ApiModel):
    """Response for a successful create."""

    id: str = Field(..., description="Identifier of the created row")


class DeletedResponse(ApiModel):
    """Response for a successful delete."""

    ok: bool = True


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryRefSchema(ApiModel):
    """Category as embedded in a product."""

    id: str | None = None
    name: str
    slug: str | None = None


class CategoryListItem(ApiModel):
    """Category row in a list, with its product count."""

    id: str
    name: str
    slug: str
    product_count: int = Field(..., description="Number of linked products")


class CategoriesListResponse(PaginatedResponse):
    """Paginated list of categories."""

    items: list[CategoryListItem]


class CategoryResponse(ApiModel):
    """Full category."""

    id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime


class StoreCategoriesResponse(ApiModel):
    """All categories for the storefront filter bar."""

    items: list[CategoryListItem]


# ============================================================================
# Product Schemas
# ============================================================================


class AdminProductListItem(ApiModel):
    """Product row in the admin list."""

    id: str
    name: str
    slug: str
    price: Decimal
    stock: int
    status: str
    images: list[str]
    updated_at: datetime
    categories: list[CategoryRefSchema]


class AdminProductsListResponse(PaginatedResponse):
    """Paginated list of products for the admin."""

    items: list[AdminProductListItem]


class StoreProductListItem(ApiModel):
    """Product card in the storefront listing."""

    id: str
    name: str
    slug: str
    price: Decimal
    compare_at: Decimal | None = None
    images: list[str]
    categories: list[CategoryRefSchema]
    created_at: datetime
    updated_at: datetime


class StoreProductsListResponse(PaginatedResponse):
    """Paginated storefront listing."""

    items: list[StoreProductListItem]


class ProductResponse(ApiModel):
    """Full product."""

    id: str
    name: str
    slug: str
    description: str | None = None
    price: Decimal
    compare_at: Decimal | None = None
    status: str
    stock: int
    images: list[str]
    tags: list[str]
    categories: list[CategoryRefSchema]
    seo_title: str
    seo_desc: str
    created_at: datetime
    updated_at: datetime
