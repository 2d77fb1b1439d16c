"""SQLAlchemy models for the product catalog.

Defines Product, Category, the product/category link table and the
product tag table.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


class ProductStatus(str, Enum):
    """Publication status of a product."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


product_categories = Table(
    "product_categories",
    Base.metadata,
    Column(
        "product_id",
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    ),
)


class Category(Base):
    """Catalog category.

    Attributes:
        id: Unique category identifier (UUID string).
        name: Display name.
        slug: Unique URL slug.
        products: Products linked to this category.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    products: Mapped[list["Product"]] = relationship(
        "Product",
        secondary=product_categories,
        back_populates="categories",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug})>"


# Width of the ``product_tags.tag`` column.
TAG_MAX_LENGTH = 100


class ProductTag(Base):
    """A single normalized tag attached to a product."""

    __tablename__ = "product_tags"

    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[str] = mapped_column(String(TAG_MAX_LENGTH), primary_key=True, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    product: Mapped["Product"] = relationship("Product", back_populates="tag_rows")


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID string).
        name: Display name.
        slug: Unique URL slug.
        description: Optional long description (may contain markup).
        price: Current price, exact decimal.
        compare_at: Optional strike-through "was" price.
        status: Publication status.
        stock: Units available.
        images: Ordered list of image URLs.
        seo_title: SEO title (max 60 characters).
        seo_desc: SEO description (max 160 characters).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    compare_at: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProductStatus.DRAFT.value, index=True
    )
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    seo_title: Mapped[str] = mapped_column(String(60), nullable=False, default="")
    seo_desc: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        index=True,
    )

    # Relationships
    categories: Mapped[list[Category]] = relationship(
        Category,
        secondary=product_categories,
        back_populates="products",
        order_by=Category.name,
    )
    tag_rows: Mapped[list[ProductTag]] = relationship(
        ProductTag,
        back_populates="product",
        cascade="all, delete-orphan",
        order_by=ProductTag.position,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    @property
    def tags(self) -> list[str]:
        """Tags in insertion order. Requires ``tag_rows`` to be loaded."""
        return [row.tag for row in self.tag_rows]

    def set_tags(self, tags: list[str]) -> None:
        """Replace the tag set, reusing rows for tags that are kept.

        Rows are reused rather than recreated so a flush never inserts a
        ``(product_id, tag)`` key that is still pending deletion.

        Args:
            tags: Normalized, de-duplicated tags.
        """
        existing = {row.tag: row for row in self.tag_rows}
        rows = []
        for position, tag in enumerate(tags):
            row = existing.get(tag) or ProductTag(tag=tag)
            row.position = position
            rows.append(row)
        self.tag_rows = rows
