"""Shared test fixtures — async SQLite in-memory DB per test."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from keepy.core.config import Settings
from keepy.core.database import build_engine, build_session_factory, init_db
from keepy.core.security import PasswordHasher
from keepy.models import Group, Keeper


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        password_schemes=["argon2"],
        password_hash_rounds=1,
    )


@pytest.fixture
async def engine(settings):
    eng = build_engine(settings)
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async with build_session_factory(engine)() as sess:
        yield sess


@pytest.fixture
def hasher(settings) -> PasswordHasher:
    return PasswordHasher(settings)


@pytest.fixture
async def keeper(session) -> Keeper:
    keeper = Keeper(filename="report.pdf")
    session.add(keeper)
    await session.commit()
    return keeper


@pytest.fixture
async def group(session) -> Group:
    group = Group(name="editors")
    session.add(group)
    await session.commit()
    return group
