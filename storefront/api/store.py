"""Public storefront API endpoints.

Serves published products only. No authentication required.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.api.admin_products import product_to_response
from storefront.api.dependencies import catalog_http_error, get_catalog_service
from storefront.api.schemas import (
    CategoryListItem,
    CategoryRefSchema,
    ErrorResponse,
    ProductResponse,
    StoreCategoriesResponse,
    StoreProductListItem,
    StoreProductsListResponse,
)
from storefront.catalog.exceptions import CatalogError
from storefront.catalog.filters import ProductFilter
from storefront.catalog.models import Product
from storefront.catalog.query import STOREFRONT_PRODUCTS, normalize_list_params
from storefront.catalog.service import CatalogService

router = APIRouter(prefix="/api/store", tags=["Storefront"])


def product_to_card(product: Product) -> StoreProductListItem:
    """Convert a storefront-projected Product to a listing card."""
    return StoreProductListItem(
        id=product.id,
        name=product.name,
        slug=product.slug,
        price=product.price,
        compare_at=product.compare_at,
        images=list(product.images or []),
        categories=[
            CategoryRefSchema(name=c.name, slug=c.slug) for c in product.categories
        ],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@router.get(
    "/products",
    response_model=StoreProductsListResponse,
    summary="Browse products",
    description="Published products with search, category filter, sorting and paging.",
)
async def list_store_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str | None, Query(description="Search in name, slug and tags")] = None,
    category: Annotated[str | None, Query(description="Category slug or 'all'")] = None,
    sort: Annotated[
        str | None,
        Query(description="featured|newest|price-asc|price-desc|name"),
    ] = None,
    page: Annotated[str | None, Query()] = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
) -> StoreProductsListResponse:
    params = normalize_list_params(STOREFRONT_PRODUCTS, page, per_page, sort)
    result = await service.list_products(
        ProductFilter.storefront(search=q, category_slug=category),
        params,
        storefront=True,
    )

    return StoreProductsListResponse(
        items=[product_to_card(p) for p in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        pages=result.pages,
    )


@router.get(
    "/products/{slug}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get published product",
)
async def get_store_product(
    slug: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a published product by slug; drafts and archived products are 404."""
    try:
        product = await service.get_published_product(slug)
    except CatalogError as e:
        raise catalog_http_error(e) from e

    return product_to_response(product)


@router.get(
    "/categories",
    response_model=StoreCategoriesResponse,
    summary="List categories",
)
async def list_store_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> StoreCategoriesResponse:
    """All categories by name with product counts."""
    categories = await service.list_all_categories()
    return StoreCategoriesResponse(
        items=[
            CategoryListItem(
                id=c.id,
                name=c.name,
                slug=c.slug,
                product_count=c.product_count,
            )
            for c in categories
        ]
    )
