"""Product catalog.

Models, slug/SEO derivation, list query normalization, filters,
repositories and the catalog service.
"""

from storefront.catalog.filters import CategoryFilter, ProductFilter
from storefront.catalog.models import Category, Product, ProductStatus, ProductTag
from storefront.catalog.query import ListParams, ListSpec, normalize_list_params
from storefront.catalog.repository import CategoryRepository, CategoryWithCount, ProductRepository
from storefront.catalog.service import CatalogService, PaginatedResult
from storefront.catalog.slug import slugify, to_seo_description, to_seo_title

__all__ = [
    # Models
    "Category",
    "Product",
    "ProductStatus",
    "ProductTag",
    # Slug/SEO
    "slugify",
    "to_seo_description",
    "to_seo_title",
    # Query
    "ListParams",
    "ListSpec",
    "normalize_list_params",
    # Filters
    "CategoryFilter",
    "ProductFilter",
    # Repository
    "CategoryRepository",
    "CategoryWithCount",
    "ProductRepository",
    # Service
    "CatalogService",
    "PaginatedResult",
]
