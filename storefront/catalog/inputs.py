"""Typed mutation payloads for products and categories.

Every payload is validated as a whole before the service reads any field.
Update payloads only carry the fields the caller explicitly set; see
:meth:`ProductUpdate.changes`.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from storefront.catalog.models import TAG_MAX_LENGTH, ProductStatus
from storefront.catalog.slug import (
    SEO_DESCRIPTION_MAX_LENGTH,
    SEO_TITLE_MAX_LENGTH,
    SLUG_MAX_LENGTH,
    is_valid_slug,
)

CENT = Decimal("0.01")

# Upper bound of the 32-bit ``stock`` column.
STOCK_MAX = 2**31 - 1

CATEGORY_SLUG_MIN_LENGTH = 2


def parse_decimal(value: Any) -> Any:
    """Parse a price from string or number input into a Decimal in cents.

    Numbers go through ``str()`` so ``49.99`` becomes ``Decimal("49.99")``
    rather than the binary float expansion. Extra fractional digits are
    rounded half-up to two places: ``"49.995"`` is stored as ``50.00``.

    Raises:
        ValueError: If the value is a boolean, not numeric or not finite.
    """
    if value is None:
        return value
    if isinstance(value, bool):
        raise ValueError("must be a decimal number")
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError("must be a decimal number") from None
    if not isinstance(value, Decimal):
        raise ValueError("must be a decimal number")
    if not value.is_finite():
        raise ValueError("must be a finite decimal number")
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("is too large") from None


Price = Annotated[
    Decimal,
    BeforeValidator(parse_decimal),
    Field(max_digits=12),
]

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=200)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=TAG_MAX_LENGTH)]


def normalize_tags(tags: list[str]) -> list[str]:
    """Trim, lowercase and de-duplicate tags, keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def _clean_slug(value: str | None) -> str | None:
    if value is None:
        return None
    slug = value.strip()
    if not slug:
        return None
    if len(slug) > SLUG_MAX_LENGTH:
        raise ValueError(f"must be at most {SLUG_MAX_LENGTH} characters")
    if not is_valid_slug(slug):
        raise ValueError("must match ^[a-z0-9-]+$")
    return slug


def _clean_category_slug(value: str | None) -> str | None:
    slug = _clean_slug(value)
    if slug is not None and len(slug) < CATEGORY_SLUG_MIN_LENGTH:
        raise ValueError(f"must be at least {CATEGORY_SLUG_MIN_LENGTH} characters")
    return slug


def _clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class CatalogInput(BaseModel):
    """Base for catalog payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Product Payloads
# ============================================================================


class ProductCreate(CatalogInput):
    """Payload for creating a product.

    ``slug``, ``seo_title`` and ``seo_desc`` are derived by the service
    when left out.
    """

    name: ProductName
    slug: str | None = None
    description: str | None = None
    price: Annotated[Price, Field(ge=0)]
    compare_at: Annotated[Price, Field(gt=0)] | None = None
    status: ProductStatus = ProductStatus.DRAFT
    stock: int = Field(default=0, ge=0, le=STOCK_MAX)
    images: list[str] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    seo_title: str | None = None
    seo_desc: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        return _clean_slug(value)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)

    @field_validator("categories")
    @classmethod
    def _dedupe_categories(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @field_validator("seo_title")
    @classmethod
    def _check_seo_title(cls, value: str | None) -> str | None:
        value = _clean_optional_text(value)
        if value and len(value) > SEO_TITLE_MAX_LENGTH:
            raise ValueError(f"must be at most {SEO_TITLE_MAX_LENGTH} characters")
        return value

    @field_validator("seo_desc")
    @classmethod
    def _check_seo_desc(cls, value: str | None) -> str | None:
        value = _clean_optional_text(value)
        if value and len(value) > SEO_DESCRIPTION_MAX_LENGTH:
            raise ValueError(f"must be at most {SEO_DESCRIPTION_MAX_LENGTH} characters")
        return value


# Fields that may be explicitly cleared with ``null`` on update.
NULLABLE_PRODUCT_FIELDS = frozenset({"description", "compare_at"})


class ProductUpdate(CatalogInput):
    """Partial product update.

    Only fields present in the request body are applied. Sending ``null``
    clears ``description`` or ``compareAt``; for any other field it is a
    validation error.
    """

    name: ProductName | None = None
    slug: str | None = None
    description: str | None = None
    price: Annotated[Price, Field(ge=0)] | None = None
    compare_at: Annotated[Price, Field(gt=0)] | None = None
    status: ProductStatus | None = None
    stock: int | None = Field(default=None, ge=0, le=STOCK_MAX)
    images: list[str] | None = None
    tags: list[Tag] | None = None
    categories: list[str] | None = None
    seo_title: str | None = Field(default=None, max_length=SEO_TITLE_MAX_LENGTH)
    seo_desc: str | None = Field(default=None, max_length=SEO_DESCRIPTION_MAX_LENGTH)

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        if value is None:
            return None
        slug = _clean_slug(value)
        if slug is None:
            raise ValueError("must not be empty")
        return slug

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str] | None) -> list[str] | None:
        return normalize_tags(value) if value is not None else None

    @field_validator("categories")
    @classmethod
    def _dedupe_categories(cls, value: list[str] | None) -> list[str] | None:
        return list(dict.fromkeys(value)) if value is not None else None

    @field_validator("seo_title", "seo_desc")
    @classmethod
    def _strip_seo(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @model_validator(mode="after")
    def _reject_null_for_required(self) -> "ProductUpdate":
        for name in self.model_fields_set - NULLABLE_PRODUCT_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the caller, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# ============================================================================
# Category Payloads
# ============================================================================


class CategoryCreate(CatalogInput):
    """Payload for creating a category; ``slug`` defaults to ``slugify(name)``."""

    name: CategoryName
    slug: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        return _clean_category_slug(value)


class CategoryUpdate(CatalogInput):
    """Partial category update."""

    name: CategoryName | None = None
    slug: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        if value is None:
            return None
        slug = _clean_category_slug(value)
        if slug is None:
            raise ValueError("must not be empty")
        return slug

    @model_validator(mode="after")
    def _reject_null(self) -> "CategoryUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the caller, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}
