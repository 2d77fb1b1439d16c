"""API layer module.

Contains FastAPI routers, request context and response schemas.
"""

from storefront.api.admin_categories import router as admin_categories_router
from storefront.api.admin_products import router as admin_products_router
from storefront.api.health import router as health_router
from storefront.api.store import router as store_router

__all__ = [
    "admin_categories_router",
    "admin_products_router",
    "health_router",
    "store_router",
]
