#!/usr/bin/env python3
"""Seed product catalog script.

Creates the demo categories and products through the catalog service so
slugs, SEO fields and the audit trail are derived the same way the admin
API derives them. Rows whose slug already exists are skipped.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --create-tables
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///catalog.db --create-tables
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from storefront.application.audit_service import AuditActor
from storefront.catalog.exceptions import SlugConflictError
from storefront.catalog.inputs import CategoryCreate, ProductCreate
from storefront.catalog.service import CatalogService
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import Base, build_engine, create_session_factory

DEMO_CATEGORIES = [
    {"name": "Suéteres"},
    {"name": "Hoodies"},
    {"name": "Accesorios"},
]

DEMO_PRODUCTS = [
    {
        "name": "Suéter Minimalista Negro",
        "description": (
            "<p>Suéter minimalista de alta calidad confeccionado en algodón premium. "
            "Diseño atemporal que combina comodidad y estilo urbano.</p>"
        ),
        "price": "89.99",
        "compareAt": "109.99",
        "status": "published",
        "stock": 15,
        "images": [
            "/minimalist-black-sweater.png",
            "/black-sweater-front.png",
            "/black-sweater-back-view.png",
        ],
        "tags": ["negro", "algodón", "minimalista"],
        "category_slugs": ["sueteres"],
    },
    {
        "name": "Hoodie Oversize Gris",
        "description": "Hoodie oversize de felpa con capucha ajustable.",
        "price": "64.50",
        "status": "published",
        "stock": 30,
        "images": ["/grey-hoodie.png"],
        "tags": ["gris", "oversize"],
        "category_slugs": ["hoodies"],
    },
    {
        "name": "Gorro de Punto",
        "description": "Gorro de punto grueso para invierno.",
        "price": "19.90",
        "status": "draft",
        "stock": 0,
        "images": [],
        "tags": ["invierno"],
        "category_slugs": ["accesorios"],
    },
]


async def create_tables(engine: AsyncEngine) -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(factory: async_sessionmaker[AsyncSession]) -> dict[str, int]:
    """Seed demo categories and products.

    Args:
        factory: Session factory for the target database.

    Returns:
        Counts of created and skipped rows.
    """
    created = {"categories": 0, "products": 0, "skipped": 0}

    async with factory() as session:
        service = CatalogService(session, AuditActor.system())
        slug_to_id: dict[str, str] = {}

        for payload in DEMO_CATEGORIES:
            try:
                category = await service.create_category(CategoryCreate(**payload))
            except SlugConflictError as e:
                print(f"  - Skipped category: {e.message}")
                await session.rollback()
                created["skipped"] += 1
                continue
            slug_to_id[category.slug] = category.id
            created["categories"] += 1
            await session.commit()

        existing = await service.list_all_categories()
        slug_to_id.update({c.slug: c.id for c in existing})

        for payload in DEMO_PRODUCTS:
            data = dict(payload)
            data["categories"] = [
                slug_to_id[slug] for slug in data.pop("category_slugs") if slug in slug_to_id
            ]
            try:
                await service.create_product(ProductCreate(**data))
            except SlugConflictError as e:
                print(f"  - Skipped product: {e.message}")
                await session.rollback()
                created["skipped"] += 1
                continue
            created["products"] += 1
            await session.commit()

    return created


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the storefront catalog")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from the ORM metadata instead of relying on migrations",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Async SQLAlchemy URL of the catalog store (default: DATABASE_URL)",
    )
    args = parser.parse_args()
    engine = build_engine(args.database_url)

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)

    if args.create_tables:
        print("Creating database tables...")
        await create_tables(engine)
        print("Tables ready.")
        print()

    result = await seed(create_session_factory(engine))

    print(f"  ✓ Categories: {result['categories']}")
    print(f"  ✓ Products: {result['products']}")
    print(f"  ✓ Skipped: {result['skipped']}")
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
