"""Admin product API endpoints.

Provides the paged product list and product create/read/update/delete
for the back-office. Requires an admin or superadmin role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from storefront.api.auth import require_admin
from storefront.api.dependencies import catalog_http_error, get_catalog_service
from storefront.api.schemas import (
    AdminProductListItem,
    AdminProductsListResponse,
    CategoryRefSchema,
    CreatedResponse,
    DeletedResponse,
    ErrorResponse,
    ProductResponse,
)
from storefront.catalog.exceptions import CatalogError
from storefront.catalog.filters import ProductFilter
from storefront.catalog.inputs import ProductCreate, ProductUpdate
from storefront.catalog.models import Product
from storefront.catalog.query import ADMIN_PRODUCTS, normalize_list_params
from storefront.catalog.service import CatalogService

router = APIRouter(
    prefix="/admin/api/products",
    tags=["Admin Products"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)


# ============================================================================
# Converters
# ============================================================================


def product_to_list_item(product: Product) -> AdminProductListItem:
    """Convert a list-projected Product to its admin row."""
    return AdminProductListItem(
        id=product.id,
        name=product.name,
        slug=product.slug,
        price=product.price,
        stock=product.stock,
        status=product.status,
        images=list(product.images or []),
        updated_at=product.updated_at,
        categories=[CategoryRefSchema(name=c.name) for c in product.categories],
    )


def product_to_response(product: Product) -> ProductResponse:
    """Convert a fully loaded Product to response schema."""
    return ProductResponse(
        id=product.id,
        name=product.name,
        slug=product.slug,
        description=product.description,
        price=product.price,
        compare_at=product.compare_at,
        status=product.status,
        stock=product.stock,
        images=list(product.images or []),
        tags=product.tags,
        categories=[
            CategoryRefSchema(id=c.id, name=c.name, slug=c.slug)
            for c in product.categories
        ],
        seo_title=product.seo_title,
        seo_desc=product.seo_desc,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=AdminProductsListResponse,
    summary="List products",
    description="Paged product list with search, status filter and sorting.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str | None, Query(description="Search in name and slug")] = None,
    page: Annotated[str | None, Query()] = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
    sort: Annotated[str | None, Query(description="name|price|stock|status|updatedAt")] = None,
    sort_dir: Annotated[str | None, Query(alias="dir", description="asc|desc")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> AdminProductsListResponse:
    """List products for the admin.

    Query values are normalized rather than rejected: an unknown sort key,
    direction or status falls back to its default.
    """
    params = normalize_list_params(ADMIN_PRODUCTS, page, per_page, sort, sort_dir)
    result = await service.list_products(
        ProductFilter.admin(search=q, status=status_filter),
        params,
    )

    return AdminProductsListResponse(
        items=[product_to_list_item(p) for p in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        pages=result.pages,
    )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(
    body: ProductCreate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CreatedResponse:
    """Create a product.

    ``slug`` defaults to the slugified name, ``seoTitle`` to the name and
    ``seoDesc`` to the plain-text description.

    Raises:
        HTTPException: 400 on invalid payload, 409 if the slug exists.
    """
    try:
        product = await service.create_product(body)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return CreatedResponse(id=product.id)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a product with its categories and tags."""
    try:
        product = await service.get_product(product_id)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Partially update a product; fields left out of the body are unchanged."""
    try:
        product = await service.update_product(product_id, body)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return product_to_response(product)


@router.delete(
    "/{product_id}",
    response_model=DeletedResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> DeletedResponse:
    """Delete a product."""
    try:
        await service.delete_product(product_id)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return DeletedResponse()
