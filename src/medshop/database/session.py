import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.pool import StaticPool

from medshop.config.settings import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless this pragma is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_url(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Create the AsyncEngine for `url`.

    - In-memory SQLite gets a StaticPool so every session sees the same database.
    - SQLite connections enforce foreign keys (restrict-on-delete relies on it).
    - Server databases use pool_pre_ping for connection health checks.
    """
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite":
        kwargs = {}
        if parsed.database in (None, "", ":memory:"):
            kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        engine = create_async_engine(url, echo=echo, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(url, echo=echo, pool_pre_ping=True)

    logger.debug("database.engine_created", extra={"backend": parsed.get_backend_name()})
    return engine


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_engine_from_url(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps loaded DTO sources readable after the service commits
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session from the factory built by the app and
    ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session
