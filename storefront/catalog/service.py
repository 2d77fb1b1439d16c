"""Catalog service for product and category operations.

High-level service that combines repository operations with the catalog
rules: slug/SEO defaulting, slug uniqueness, the category referential
guard, partial updates and the audit trail.
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.audit_service import AuditActor, AuditService
from storefront.catalog.exceptions import (
    CatalogValidationError,
    CategoryInUseError,
    CategoryNotFoundError,
    ProductNotFoundError,
    SlugConflictError,
)
from storefront.catalog.filters import CategoryFilter, ProductFilter
from storefront.catalog.inputs import (
    CATEGORY_SLUG_MIN_LENGTH,
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
)
from storefront.catalog.models import Category, Product
from storefront.catalog.query import ListParams
from storefront.catalog.repository import CategoryRepository, CategoryWithCount, ProductRepository
from storefront.catalog.slug import slugify, to_seo_description, to_seo_title

T = TypeVar("T")

logger = structlog.get_logger()

# ProductUpdate fields copied onto the row as-is.
_PLAIN_PRODUCT_FIELDS = (
    "name",
    "slug",
    "description",
    "price",
    "compare_at",
    "stock",
    "images",
    "seo_title",
    "seo_desc",
)


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        per_page: Items per page.
    """

    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        """Total pages; at least 1 even when there are no items."""
        return max(1, math.ceil(self.total / self.per_page))


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session, AuditActor.system())
            product = await service.create_product(
                ProductCreate(name="Test Hoodie", price="49.99"),
            )
            await session.commit()
    """

    def __init__(self, session: AsyncSession, actor: AuditActor | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            actor: Who is performing mutations, for the audit trail.
        """
        self.session = session
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)
        self.audit = AuditService(session, actor)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def list_products(
        self,
        filters: ProductFilter,
        params: ListParams,
        storefront: bool = False,
    ) -> PaginatedResult[Product]:
        """List products with filters and pagination.

        Issues the page fetch and the count as two independent statements.

        Args:
            filters: Filter parameters.
            params: Normalized pagination and sort parameters.
            storefront: Use the storefront sort keys and projection.

        Returns:
            Paginated product results.
        """
        items = await self.products.find_page(filters, params, storefront=storefront)
        total = await self.products.count(filters)

        return PaginatedResult(
            items=list(items),
            total=total,
            page=params.page,
            per_page=params.per_page,
        )

    async def list_categories(
        self,
        filters: CategoryFilter,
        params: ListParams,
    ) -> PaginatedResult[CategoryWithCount]:
        """List categories with product counts, filters and pagination."""
        items = await self.categories.find_page(filters, params)
        total = await self.categories.count(filters)

        return PaginatedResult(
            items=items,
            total=total,
            page=params.page,
            per_page=params.per_page,
        )

    async def list_all_categories(self) -> list[CategoryWithCount]:
        """All categories by name with product counts."""
        return await self.categories.list_with_counts()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID.

        Raises:
            ProductNotFoundError: If no product has this ID.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def get_published_product(self, slug: str) -> Product:
        """Get a published product by slug.

        Raises:
            ProductNotFoundError: If no published product has this slug.
        """
        product = await self.products.get_published_by_slug(slug)
        if product is None:
            raise ProductNotFoundError(slug)
        return product

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a product.

        Args:
            data: Validated create payload.

        Returns:
            The created product.

        Raises:
            CatalogValidationError: If the slug cannot be derived or a category is unknown.
            SlugConflictError: If the slug is already taken.
        """
        slug = data.slug or slugify(data.name)
        if not slug:
            raise CatalogValidationError("Slug could not be derived from name", field="slug")

        if await self.products.slug_exists(slug):
            logger.warning("Product slug conflict", slug=slug)
            raise SlugConflictError("product", slug)

        categories = await self._resolve_categories(data.categories)

        product = Product(
            name=data.name,
            slug=slug,
            description=data.description,
            price=data.price,
            compare_at=data.compare_at,
            status=data.status.value,
            stock=data.stock,
            images=list(data.images),
            seo_title=data.seo_title or to_seo_title(data.name),
            seo_desc=data.seo_desc or to_seo_description(data.description),
        )
        product.categories = categories
        product.set_tags(data.tags)

        await self._save_product(product)
        await self.audit.record(
            "product",
            product.id,
            "create",
            diff={
                "name": product.name,
                "slug": product.slug,
                "price": product.price,
                "status": product.status,
                "categories": [c.id for c in categories],
            },
        )

        logger.info("Product created", product_id=product.id, slug=product.slug)
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        """Apply a partial update to a product.

        Only fields explicitly set in ``data`` are written.

        Raises:
            ProductNotFoundError: If no product has this ID.
            CatalogValidationError: If a category is unknown.
            SlugConflictError: If the new slug belongs to another product.
        """
        product = await self.get_product(product_id)
        changes = data.changes()

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != product.slug:
            if await self.products.slug_exists(new_slug, exclude_id=product.id):
                logger.warning("Product slug conflict", slug=new_slug, product_id=product.id)
                raise SlugConflictError("product", new_slug)

        for field in _PLAIN_PRODUCT_FIELDS:
            if field in changes:
                setattr(product, field, changes[field])
        if "status" in changes:
            product.status = changes["status"].value
        if "tags" in changes:
            product.set_tags(changes["tags"])
        if "categories" in changes:
            product.categories = await self._resolve_categories(changes["categories"])

        await self._save_product(product)
        if changes:
            await self.audit.record("product", product.id, "update", diff=changes)

        logger.info(
            "Product updated",
            product_id=product.id,
            fields=sorted(changes),
        )
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product unconditionally.

        Raises:
            ProductNotFoundError: If no product has this ID.
        """
        product = await self.get_product(product_id)
        slug = product.slug
        await self.products.delete(product)
        await self.audit.record("product", product_id, "delete", diff={"slug": slug})

        logger.info("Product deleted", product_id=product_id, slug=slug)

    async def _resolve_categories(self, category_ids: list[str]) -> list[Category]:
        categories = await self.categories.get_many(category_ids)
        if len(categories) != len(category_ids):
            found = {c.id for c in categories}
            missing = [cid for cid in category_ids if cid not in found]
            raise CatalogValidationError(
                f"Unknown category id(s): {', '.join(missing)}",
                field="categories",
            )
        return categories

    async def _save_product(self, product: Product) -> None:
        try:
            await self.products.save(product)
        except IntegrityError as e:
            # Lost a race on the unique slug constraint.
            logger.warning("Product slug constraint violated", slug=product.slug, error=str(e.orig))
            raise SlugConflictError("product", product.slug) from e

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_category(self, category_id: str) -> Category:
        """Get category by ID.

        Raises:
            CategoryNotFoundError: If no category has this ID.
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def create_category(self, data: CategoryCreate) -> Category:
        """Create a category.

        Raises:
            CatalogValidationError: If the slug cannot be derived from the name.
            SlugConflictError: If the slug is already taken.
        """
        slug = data.slug or slugify(data.name)
        if len(slug) < CATEGORY_SLUG_MIN_LENGTH:
            raise CatalogValidationError("Slug could not be derived from name", field="slug")

        if await self.categories.slug_exists(slug):
            logger.warning("Category slug conflict", slug=slug)
            raise SlugConflictError("category", slug)

        category = Category(name=data.name, slug=slug)
        await self._save_category(category)
        await self.audit.record(
            "category",
            category.id,
            "create",
            diff={"name": category.name, "slug": category.slug},
        )

        logger.info("Category created", category_id=category.id, slug=slug)
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """Apply a partial update to a category.

        Raises:
            CategoryNotFoundError: If no category has this ID.
            SlugConflictError: If the new slug belongs to another category.
        """
        category = await self.get_category(category_id)
        changes = data.changes()

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != category.slug:
            if await self.categories.slug_exists(new_slug, exclude_id=category.id):
                logger.warning("Category slug conflict", slug=new_slug, category_id=category.id)
                raise SlugConflictError("category", new_slug)

        for field, value in changes.items():
            setattr(category, field, value)

        await self._save_category(category)
        if changes:
            await self.audit.record("category", category.id, "update", diff=changes)

        logger.info("Category updated", category_id=category.id, fields=sorted(changes))
        return category

    async def delete_category(self, category_id: str) -> None:
        """Delete a category that has no linked products.

        Raises:
            CategoryNotFoundError: If no category has this ID.
            CategoryInUseError: If any product is still linked to it.
        """
        category = await self.get_category(category_id)

        product_count = await self.categories.count_products(category.id)
        if product_count > 0:
            logger.warning(
                "Category delete blocked",
                category_id=category.id,
                product_count=product_count,
            )
            raise CategoryInUseError(category.id, product_count)

        slug = category.slug
        await self.categories.delete(category.id)
        await self.audit.record("category", category_id, "delete", diff={"slug": slug})

        logger.info("Category deleted", category_id=category_id, slug=slug)

    async def _save_category(self, category: Category) -> None:
        try:
            await self.categories.save(category)
        except IntegrityError as e:
            logger.warning("Category slug constraint violated", slug=category.slug, error=str(e.orig))
            raise SlugConflictError("category", category.slug) from e
