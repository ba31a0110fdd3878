"""
Core pytest configuration for the entire test suite.

Every test gets its own application and its own in-memory SQLite database
(`sqlite+aiosqlite:///:memory:` on a StaticPool), with the in-process routines
standing in for the SQL Server trigger/procedure/functions. Nothing leaks between
tests, so commits made by services need no savepoint tricks.

Domain fixtures (seed data, repositories) live in `tests/test_fixtures/` and are
imported at the bottom of this module so they are available everywhere.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (before importing libraries that log at import time)
# -------------------------------
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import medshop.models  # noqa: F401 - registers every table on Base.metadata
from medshop.config.settings import Settings
from medshop.database.base import Base
from medshop.main import create_app


def make_test_settings(**overrides) -> Settings:
    """Settings for an isolated in-memory database; `_env_file=None` ignores any local .env."""
    values = dict(
        ENV="testing",
        TESTING=True,
        DB_DIALECT="sqlite",
        DB_DRIVER="aiosqlite",
        DB_NAME=":memory:",
        ROUTINES_BACKEND="inprocess",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
        LOG_TO_STDOUT=True,
        LOG_USE_QUEUE=False,
        API_PREFIX="/api",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


# ------------------------------------------------------------------------------------------------
# APPLICATION / DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """
    A fresh application with its schema created.

    httpx's ASGITransport does not run the lifespan, so the engine is disposed here.
    """
    application = create_app(test_settings)
    engine: AsyncEngine = application.state.engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    await engine.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """
    A session on the same in-memory database the app uses (StaticPool: one connection),
    for seeding and for repository/routine tests.
    """
    async with app.state.session_factory() as session:
        yield session


# Domain fixtures
from .test_fixtures.store_fixtures import (  # noqa: E402,F401
    faker,
    seed_store,
    make_user,
)
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    category_repository,
    product_repository,
    user_repository,
    order_repository,
    routines,
    translator,
)
