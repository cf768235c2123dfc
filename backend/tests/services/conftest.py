"""Service test fixtures — async DB + FastAPI test client + seed data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - Seeded rows are committed before the test body runs

Design Decisions:
    - SQLite in-memory with StaticPool: client sessions and test_db share one database
    - Assertions on stock read columns directly (select(Product.stock)) so a stale
      identity map in test_db can never hide a mutation
"""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from storefront.db.base import Base
from storefront.infrastructure.database import get_db, DatabaseSessionManager
import storefront.infrastructure.database as db_module
import storefront.models  # noqa: F401
from storefront.models.product import Product
from storefront.models.user import User, UserPreference
from storefront.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_user(test_db):
    """Insert a buyer with a preference."""
    user = User(
        email="buyer@example.com",
        first_name="Ada",
        last_name="Lovelace",
        address="12 Analytical Row",
        preference=UserPreference(receive_email=True),
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
def make_product(test_db):
    """Factory: insert a product and return its id.

    Ids (not instances) are returned: a rollback in the code under test expires every
    instance in test_db, and touching an expired attribute would need async IO.
    """
    async def _make(
        stock: int = 5,
        price: float = 10.0,
        name: str = "Trail Shoe",
        category: str = "SPORTS",
        product_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        product = Product(
            id=product_id or uuid.uuid4(),
            name=name, category=category, price=price, stock=stock,
        )
        test_db.add(product)
        await test_db.commit()
        return product.id
    return _make


@pytest.fixture
def stock_of(test_db):
    """Read a product's current stock straight from the table."""
    async def _stock(product_id: uuid.UUID) -> int:
        return await test_db.scalar(
            select(Product.stock).where(Product.id == product_id),
        )
    return _stock


@pytest.fixture
def buyer_id(seed_user):
    """Seeded buyer id, captured before any rollback can expire seed_user."""
    return seed_user.id
