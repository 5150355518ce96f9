"""Shared store plumbing: driver-error translation and column introspection."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from keepy.core.exceptions import ConstraintViolation, NotFound, StoreUnavailable

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_errors(session: AsyncSession, action: str) -> AsyncIterator[None]:
    """Map SQLAlchemy driver errors onto the keepy error taxonomy.

    A rejected write is rolled back so nothing partial remains in the session.
    """
    try:
        yield
    except IntegrityError as exc:
        await _rollback(session, action)
        logger.warning("Constraint violation during %s: %s", action, exc.orig)
        raise ConstraintViolation(f"{action} rejected: {exc.orig}") from exc
    except (OperationalError, InterfaceError) as exc:
        await _rollback(session, action)
        logger.error("Store unavailable during %s: %s", action, exc.orig)
        raise StoreUnavailable(f"{action} failed: store unavailable") from exc
    except OSError as exc:
        # asyncpg surfaces refused connections as plain OSErrors
        await _rollback(session, action)
        logger.error("Store unreachable during %s: %s", action, exc)
        raise StoreUnavailable(f"{action} failed: store unreachable") from exc


async def _rollback(session: AsyncSession, action: str) -> None:
    """Roll back after a failed statement; a failing rollback must not hide the original error."""
    try:
        await session.rollback()
    except (SQLAlchemyError, OSError):
        logger.warning("Rollback after failed %s also failed", action, exc_info=True)


async def table_column_types(
    session: AsyncSession, table_name: str
) -> list[tuple[str, str]]:
    """Return ``(column_name, data_type)`` pairs for ``table_name``."""

    def _columns(sync_conn) -> list[tuple[str, str]] | None:
        inspector = inspect(sync_conn)
        if not inspector.has_table(table_name):
            return None
        return [(col["name"], str(col["type"])) for col in inspector.get_columns(table_name)]

    async with translate_errors(session, "column lookup"):
        conn = await session.connection()
        columns = await conn.run_sync(_columns)

    if columns is None:
        raise NotFound(f"Table '{table_name}' not found")
    return columns
