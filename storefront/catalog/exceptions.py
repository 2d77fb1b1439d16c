"""Catalog exceptions.

Errors raised by the catalog service when a payload is invalid, a row
cannot be found, or a uniqueness/referential rule blocks a mutation.
Route handlers translate them into HTTP responses.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    error_code = "CATALOG_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class CatalogValidationError(CatalogError):
    """Raised when a payload passes schema checks but breaks a catalog rule."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else {})
        self.field = field


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(CatalogError):
    """Base class for lookups by id that resolve to nothing."""

    error_code = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Raised when a product id does not exist."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class CategoryNotFoundError(NotFoundError):
    """Raised when a category id does not exist."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: str) -> None:
        super().__init__(
            f"Category not found: {category_id}",
            details={"category_id": category_id},
        )


# ============================================================================
# Conflict Errors
# ============================================================================


class ConflictError(CatalogError):
    """Base class for mutations blocked by existing state."""

    error_code = "CONFLICT"


class SlugConflictError(ConflictError):
    """Raised when a slug is already taken by another row."""

    error_code = "SLUG_EXISTS"

    def __init__(self, entity: str, slug: str) -> None:
        """Initialize slug conflict error.

        Args:
            entity: Entity type ("product" or "category").
            slug: The conflicting slug.
        """
        super().__init__(
            f"A {entity} with slug '{slug}' already exists",
            details={"entity": entity, "slug": slug},
        )


class CategoryInUseError(ConflictError):
    """Raised when deleting a category that still has linked products."""

    error_code = "CATEGORY_HAS_PRODUCTS"

    def __init__(self, category_id: str, product_count: int) -> None:
        super().__init__(
            f"Category {category_id} cannot be deleted: "
            f"{product_count} linked product(s)",
            details={"category_id": category_id, "product_count": product_count},
        )
