"""Fixtures de test / Test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import carcost.models  # noqa: F401
from carcost.database import Base, get_db
from carcost.main import app
from carcost.models.user import User
from carcost.models.vehicle import EnergyClass, Vehicle
from carcost.services.scoping import TenantScope


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine):
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


async def make_user(db: AsyncSession, email: str) -> User:
    user = User(email=email, hashed_password="not-a-real-hash")
    db.add(user)
    await db.flush()
    return user


async def make_vehicle(db: AsyncSession, user: User, **overrides) -> Vehicle:
    fields = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "purchase_price": Decimal("20000.00"),
        "ownership_start": date(2024, 1, 1),
        "energy_class": EnergyClass.GASOLINE,
    }
    fields.update(overrides)
    vehicle = Vehicle(user_id=user.id, **fields)
    db.add(vehicle)
    await db.flush()
    return vehicle


@pytest.fixture
async def user(db):
    return await make_user(db, "owner@example.com")


@pytest.fixture
async def other_user(db):
    return await make_user(db, "intruder@example.com")


@pytest.fixture
def scope(user):
    return TenantScope(user.id)


@pytest.fixture
def other_scope(other_user):
    return TenantScope(other_user.id)


@pytest.fixture
async def vehicle(db, user):
    return await make_vehicle(db, user)


@pytest.fixture
async def client(engine):
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client: AsyncClient, email: str, password: str = "secret123") -> dict:
    """Inscrit un compte et renvoie les headers Bearer / Register and return Bearer headers."""
    resp = await client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "confirm_password": password},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
