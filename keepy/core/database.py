"""Async database engine and session factory."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from keepy.core.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine for ``settings.database_url``.

    Pool sizing only applies to server databases; an in-memory SQLite URL
    shares a single connection so every session sees the same tables.
    """
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        kwargs: dict = {}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, echo=settings.database_echo, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite leaves foreign keys (and ON DELETE actions) off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    return build_engine(get_settings())


@lru_cache
def get_session_factory() -> sessionmaker:
    return build_session_factory(get_engine())


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session for one unit of work."""
    async with get_session_factory()() as session:
        yield session


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all tables. Schema migrations are run externally in production."""
    import keepy.models  # noqa: F401  (populate SQLModel.metadata)

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
