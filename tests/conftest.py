"""
Pytest configuration and fixtures for accommodation tests.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from accommodation_api.models import City, Country, Restaurant
from accommodation_shared.infrastructure.db import (
    create_session_factory,
    enable_sqlite_foreign_keys,
    init_db,
)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """
    Fresh in-memory database per test.
    StaticPool keeps the single connection alive, so every session sees the same data.
    Foreign keys are enforced as on the production database.
    """
    test_engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    await init_db(test_engine)
    try:
        yield test_engine
    finally:
        await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    """Database session for the test body."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seed_country(db_session):
    """Create a test country."""
    country = Country(id="za", name="South Africa", code="ZA")
    db_session.add(country)
    await db_session.commit()
    return country


@pytest.fixture
async def seed_city(db_session, seed_country):
    """Create a test city in the test country."""
    city = City(id="cpt", name="Cape Town", country_id=seed_country.id)
    db_session.add(city)
    await db_session.commit()
    return city


@pytest.fixture
async def seed_other_city(db_session, seed_country):
    """Create a second city in the test country."""
    city = City(id="jnb", name="Johannesburg", country_id=seed_country.id)
    db_session.add(city)
    await db_session.commit()
    return city


@pytest.fixture
async def seed_restaurant(db_session):
    """Create a test restaurant."""
    restaurant = Restaurant(id="r-seed", name="Harbour Grill", comments="Sea view")
    db_session.add(restaurant)
    await db_session.commit()
    return restaurant
