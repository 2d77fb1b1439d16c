"""Admin category API endpoints.

Provides the paged category list (with product counts) and category
create/read/update/delete. Requires an admin or superadmin role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from storefront.api.auth import require_admin
from storefront.api.dependencies import catalog_http_error, get_catalog_service
from storefront.api.schemas import (
    CategoriesListResponse,
    CategoryListItem,
    CategoryResponse,
    CreatedResponse,
    DeletedResponse,
    ErrorResponse,
)
from storefront.catalog.exceptions import CatalogError
from storefront.catalog.filters import CategoryFilter
from storefront.catalog.inputs import CategoryCreate, CategoryUpdate
from storefront.catalog.models import Category
from storefront.catalog.query import ADMIN_CATEGORIES, normalize_list_params
from storefront.catalog.repository import CategoryWithCount
from storefront.catalog.service import CatalogService

router = APIRouter(
    prefix="/admin/api/categories",
    tags=["Admin Categories"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)


# ============================================================================
# Converters
# ============================================================================


def category_to_list_item(category: CategoryWithCount) -> CategoryListItem:
    return CategoryListItem(
        id=category.id,
        name=category.name,
        slug=category.slug,
        product_count=category.product_count,
    )


def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        slug=category.slug,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=CategoriesListResponse,
    summary="List categories",
    description="Paged category list with product counts, search and sorting.",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str | None, Query(description="Search in name and slug")] = None,
    page: Annotated[str | None, Query()] = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
    sort: Annotated[str | None, Query(description="name|slug|count")] = None,
    sort_dir: Annotated[str | None, Query(alias="dir", description="asc|desc")] = None,
) -> CategoriesListResponse:
    """List categories for the admin.

    ``sort=count`` orders by the number of linked products.
    """
    params = normalize_list_params(ADMIN_CATEGORIES, page, per_page, sort, sort_dir)
    result = await service.list_categories(CategoryFilter(search=q), params)

    return CategoriesListResponse(
        items=[category_to_list_item(c) for c in result.items],
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
    summary="Create category",
)
async def create_category(
    body: CategoryCreate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CreatedResponse:
    """Create a category.

    Raises:
        HTTPException: 400 on invalid payload, 409 if the slug exists.
    """
    try:
        category = await service.create_category(body)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return CreatedResponse(id=category.id)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    try:
        category = await service.get_category(category_id)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return category_to_response(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update category",
)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    """Partially update a category."""
    try:
        category = await service.update_category(category_id, body)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return category_to_response(category)


@router.delete(
    "/{category_id}",
    response_model=DeletedResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Delete category",
)
async def delete_category(
    category_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> DeletedResponse:
    """Delete a category.

    Raises:
        HTTPException: 409 while any product is still linked to it.
    """
    try:
        await service.delete_category(category_id)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return DeletedResponse()
