"""Shared test fixtures.

The app runs against an in-memory SQLite database (aiosqlite); tables are
created before each test and dropped after it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.database import async_session_factory, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import AnalyticalAccount, Base, Contact, Product, ProductCategory  # noqa: E402


@pytest_asyncio.fixture(autouse=True)
async def database():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db():
    """A session for service-level tests; rolled back afterwards."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seed():
    """Committed master data, returned as a name -> id map.

    Vendors v1 (tag "wood") and v2, customer c1 (tag "retail"), categories
    chairs and tables, products chair (chairs), table (tables) and part (no
    category), cost centers workshop, showroom and online.
    """
    async with async_session_factory() as session:
        chairs = ProductCategory(name="Chairs")
        tables = ProductCategory(name="Tables")
        session.add_all([chairs, tables])
        await session.flush()

        rows = {
            "v1": Contact(name="Oakwood Supplies", contact_type="VENDOR", tag="wood"),
            "v2": Contact(name="Metalworks", contact_type="VENDOR"),
            "c1": Contact(name="Home Store", contact_type="CUSTOMER", tag="retail"),
            "chair": Product(name="Oak Chair", sku="CH-1", category_id=chairs.id),
            "table": Product(name="Walnut Table", sku="TB-1", category_id=tables.id),
            "part": Product(name="Loose Part", sku="LP-1"),
            "workshop": AnalyticalAccount(code="CC-WS", name="Workshop"),
            "showroom": AnalyticalAccount(code="CC-SR", name="Showroom"),
            "online": AnalyticalAccount(code="CC-ON", name="Online"),
        }
        session.add_all(rows.values())
        await session.flush()

        ids = {name: row.id for name, row in rows.items()}
        ids["chairs"] = chairs.id
        ids["tables"] = tables.id
        await session.commit()
    return ids


@pytest_asyncio.fixture
async def client():
    """Async test client for the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
