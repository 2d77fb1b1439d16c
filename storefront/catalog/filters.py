"""Catalog filter builders.

Build declarative SQLAlchemy predicates for product and category lists.
The same predicate list is applied to the page fetch and to the count
query so both reflect one filter.
"""

from dataclasses import dataclass

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.expression import ColumnElement

from storefront.catalog.models import Category, Product, ProductStatus, ProductTag

ALL_CATEGORIES = "all"

_PRODUCT_STATUSES = frozenset(s.value for s in ProductStatus)


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str) -> ColumnElement[bool]:
    return column.ilike(f"%{_escape_like(term)}%", escape="\\")


@dataclass
class ProductFilter:
    """Filter parameters for product lists.

    Attributes:
        search: Free-text query over name and slug.
        status: Exact status match; ignored when not a known status.
        category_slug: Restrict to products in this category ("all" means any).
        match_tags: Also match products tagged exactly ``search.lower()``.
    """

    search: str | None = None
    status: str | None = None
    category_slug: str | None = None
    match_tags: bool = False

    @classmethod
    def admin(cls, search: str | None = None, status: str | None = None) -> "ProductFilter":
        """Filter for the admin product list."""
        return cls(search=search, status=status)

    @classmethod
    def storefront(
        cls,
        search: str | None = None,
        category_slug: str | None = None,
    ) -> "ProductFilter":
        """Filter for the public listing: published only, tags searchable."""
        return cls(
            search=search,
            status=ProductStatus.PUBLISHED.value,
            category_slug=category_slug,
            match_tags=True,
        )

    def conditions(self) -> list[ColumnElement[bool]]:
        """Build the predicate list.

        Returns:
            Predicates to AND together; empty means every row matches.
        """
        conditions: list[ColumnElement[bool]] = []

        term = (self.search or "").strip()
        if term:
            alternatives = [
                _contains(Product.name, term),
                _contains(Product.slug, term),
            ]
            if self.match_tags:
                alternatives.append(Product.tag_rows.any(ProductTag.tag == term.lower()))
            conditions.append(or_(*alternatives))

        status = (self.status or "").strip()
        if status in _PRODUCT_STATUSES:
            conditions.append(Product.status == status)

        category_slug = (self.category_slug or "").strip()
        if category_slug and category_slug != ALL_CATEGORIES:
            conditions.append(Product.categories.any(Category.slug == category_slug))

        return conditions

    def where(self) -> ColumnElement[bool]:
        """All predicates combined into a single expression."""
        conditions = self.conditions()
        return and_(*conditions) if conditions else true()


@dataclass
class CategoryFilter:
    """Filter parameters for category lists.

    Attributes:
        search: Free-text query over name and slug.
    """

    search: str | None = None

    def conditions(self) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        term = (self.search or "").strip()
        if term:
            conditions.append(
                or_(_contains(Category.name, term), _contains(Category.slug, term))
            )
        return conditions

    def where(self) -> ColumnElement[bool]:
        conditions = self.conditions()
        return and_(*conditions) if conditions else true()
