"""Catalog repositories for database operations.

Provide CRUD operations plus the paged list queries: one bounded, sorted
page fetch and one count, both driven by the same filter.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload

from storefront.catalog.filters import CategoryFilter, ProductFilter
from storefront.catalog.models import Category, Product, ProductStatus, product_categories
from storefront.catalog.query import SORT_ASC, SORT_DESC, ListParams

# Admin sort keys -> column
PRODUCT_SORT_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
    "status": Product.status,
    "updatedAt": Product.updated_at,
}

# Storefront sort keys -> (column, direction)
STOREFRONT_SORTS = {
    "featured": (Product.updated_at, SORT_DESC),
    "newest": (Product.created_at, SORT_DESC),
    "price-asc": (Product.price, SORT_ASC),
    "price-desc": (Product.price, SORT_DESC),
    "name": (Product.name, SORT_ASC),
}


def _ordered(column: Any, direction: str) -> Any:
    return column.desc() if direction == SORT_DESC else column.asc()


def product_count_subquery() -> Any:
    """Correlated ``COUNT`` of products linked to the outer Category row."""
    return (
        select(func.count())
        .select_from(product_categories)
        .where(product_categories.c.category_id == Category.id)
        .correlate(Category)
        .scalar_subquery()
    )


@dataclass
class CategoryWithCount:
    """Category projection with its linked product count."""

    id: str
    name: str
    slug: str
    product_count: int


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            items = await repo.find_page(ProductFilter.admin(search="hoodie"), params)
            total = await repo.count(ProductFilter.admin(search="hoodie"))
    """

    # Columns loaded for list rows; detail views load the full row.
    ADMIN_LIST_COLUMNS = (
        Product.name,
        Product.slug,
        Product.price,
        Product.stock,
        Product.status,
        Product.images,
        Product.updated_at,
    )
    STOREFRONT_LIST_COLUMNS = (
        Product.name,
        Product.slug,
        Product.price,
        Product.compare_at,
        Product.images,
        Product.created_at,
        Product.updated_at,
    )

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Add a product and flush so constraint violations surface here.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID with categories and tags loaded.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.categories), selectinload(Product.tag_rows))
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> Product | None:
        """Get a published product by slug."""
        query = (
            select(Product)
            .where(Product.slug == slug, Product.status == ProductStatus.PUBLISHED.value)
            .options(selectinload(Product.categories), selectinload(Product.tag_rows))
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether a slug is taken by another product.

        Args:
            slug: Slug to look up.
            exclude_id: Product ID to ignore (the row being updated).

        Returns:
            True if a different product owns the slug.
        """
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def find_page(
        self,
        filters: ProductFilter,
        params: ListParams,
        storefront: bool = False,
    ) -> Sequence[Product]:
        """Fetch one sorted page of products matching a filter.

        Args:
            filters: Filter built by the caller.
            params: Normalized pagination and sort parameters.
            storefront: Use storefront sort keys and projection.

        Returns:
            Products on the requested page.
        """
        if storefront:
            column, direction = STOREFRONT_SORTS[params.sort]
            columns = self.STOREFRONT_LIST_COLUMNS
            category_columns = (Category.name, Category.slug)
        else:
            column = PRODUCT_SORT_COLUMNS[params.sort]
            direction = params.dir
            columns = self.ADMIN_LIST_COLUMNS
            category_columns = (Category.name,)

        query = (
            select(Product)
            .where(filters.where())
            .order_by(_ordered(column, direction), Product.id.asc())
            .limit(params.limit)
            .offset(params.offset)
            .options(
                load_only(*columns),
                selectinload(Product.categories).load_only(*category_columns),
            )
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, filters: ProductFilter) -> int:
        """Count products matching a filter.

        Args:
            filters: Same filter passed to :meth:`find_page`.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id)).where(filters.where())
        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete(self, product: Product) -> None:
        """Delete a product along with its tag rows and category links.

        Args:
            product: Product loaded through :meth:`get_by_id`.
        """
        await self.session.delete(product)
        await self.session.flush()


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Add a category and flush so constraint violations surface here."""
        self.session.add(category)
        await self.session.flush()
        return category

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            Category if found, None otherwise.
        """
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_many(self, category_ids: Sequence[str]) -> list[Category]:
        """Get categories by IDs, preserving the requested order.

        Unknown IDs are skipped; callers compare lengths to detect them.
        """
        if not category_ids:
            return []
        result = await self.session.execute(
            select(Category).where(Category.id.in_(category_ids))
        )
        by_id = {c.id: c for c in result.scalars().all()}
        return [by_id[cid] for cid in category_ids if cid in by_id]

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether a slug is taken by another category."""
        query = select(Category.id).where(Category.slug == slug)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def count_products(self, category_id: str) -> int:
        """Count products linked to a category.

        Args:
            category_id: Category ID.

        Returns:
            Number of linked products.
        """
        query = (
            select(func.count())
            .select_from(product_categories)
            .where(product_categories.c.category_id == category_id)
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    async def find_page(
        self,
        filters: CategoryFilter,
        params: ListParams,
    ) -> list[CategoryWithCount]:
        """Fetch one sorted page of categories with product counts.

        Sorting by ``count`` orders by the correlated count subquery, so the
        store ranks the whole collection before the page is cut.

        Args:
            filters: Filter built by the caller.
            params: Normalized pagination and sort parameters.

        Returns:
            Categories on the requested page.
        """
        product_count = product_count_subquery()
        sort_columns = {
            "name": Category.name,
            "slug": Category.slug,
            "count": product_count,
        }

        query = (
            select(
                Category.id,
                Category.name,
                Category.slug,
                product_count.label("product_count"),
            )
            .where(filters.where())
            .order_by(_ordered(sort_columns[params.sort], params.dir), Category.id.asc())
            .limit(params.limit)
            .offset(params.offset)
        )

        result = await self.session.execute(query)
        return [
            CategoryWithCount(
                id=row.id,
                name=row.name,
                slug=row.slug,
                product_count=row.product_count,
            )
            for row in result.all()
        ]

    async def count(self, filters: CategoryFilter) -> int:
        """Count categories matching a filter."""
        query = select(func.count(Category.id)).where(filters.where())
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_with_counts(self) -> list[CategoryWithCount]:
        """All categories by name with product counts."""
        product_count = product_count_subquery()
        query = select(
            Category.id,
            Category.name,
            Category.slug,
            product_count.label("product_count"),
        ).order_by(Category.name.asc(), Category.id.asc())

        result = await self.session.execute(query)
        return [
            CategoryWithCount(
                id=row.id,
                name=row.name,
                slug=row.slug,
                product_count=row.product_count,
            )
            for row in result.all()
        ]

    async def delete(self, category_id: str) -> None:
        """Delete a category row by ID."""
        await self.session.execute(delete(Category).where(Category.id == category_id))
        await self.session.flush()
