"""Test configuration and fixtures"""

import os

# Settings are read at import time, so point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "console")

from datetime import date, time

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models.reservation import Reservation, ReservationStatus
from app.models.table import Table
from app.services.validation import normalize_phone
from app.store import Store


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def store(test_db):
    """Store bound to the test session"""
    return Store(test_db)


@pytest.fixture
def make_reservation(test_db):
    """Insert a reservation directly, bypassing validation"""
    async def _make(**overrides) -> Reservation:
        values = {
            "first_name": "Morty",
            "last_name": "Smith",
            "mobile_number": "800-555-1212",
            "reservation_date": date(2030, 1, 3),
            "reservation_time": time(18, 0),
            "people": 2,
            "status": ReservationStatus.BOOKED.value,
        }
        values.update(overrides)
        values["mobile_digits"] = normalize_phone(values["mobile_number"])

        reservation = Reservation(**values)
        test_db.add(reservation)
        await test_db.commit()
        await test_db.refresh(reservation)
        return reservation
    return _make


@pytest.fixture
def make_table(test_db):
    """Insert a table directly"""
    async def _make(table_name: str = "#1", capacity: int = 6, reservation_id=None) -> Table:
        table = Table(table_name=table_name, capacity=capacity, reservation_id=reservation_id)
        test_db.add(table)
        await test_db.commit()
        await test_db.refresh(table)
        return table
    return _make


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
