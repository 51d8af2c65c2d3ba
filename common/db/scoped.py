"""
Operation-scoped database sessions.

    # One operation - acquires, commits and releases immediately
    async with get_session() as session:
        result = await session.get(Model, id)

    # Several operations that must commit together
    async with transaction():
        await subscription_repo.upsert_active(...)
        await payment_repo.upsert_captured(...)

Connections are never held across gateway or other HTTP calls.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import get_logger
from common.db.session import AsyncSessionLocal, AsyncSessionLocalReadonly
from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
    is_readonly_forced,
)

logger = get_logger(__name__)


def _session_factory(readonly: bool):
    # Resolved at call time so tests can swap the factories
    return AsyncSessionLocalReadonly if readonly else AsyncSessionLocal


@asynccontextmanager
async def transaction(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    All repository calls inside share one session. Commits on success
    (unless readonly), rolls back and re-raises on any exception.
    """
    effective_readonly = readonly or is_readonly_forced()

    start = time.perf_counter()
    async with _session_factory(effective_readonly)() as session:
        logger.debug(
            f"Transaction session acquire: {(time.perf_counter() - start) * 1000:.2f}ms, readonly={effective_readonly}"
        )

        token = set_current_session(session, readonly=effective_readonly)
        try:
            yield session
            if not effective_readonly:
                await session.commit()
        except Exception as e:
            logger.error(f"Transaction rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            reset_current_session(token, readonly=effective_readonly)


@asynccontextmanager
async def get_session(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for a single DB operation.

    Reuses the session of an enclosing transaction() (which then owns the
    commit); otherwise acquires a fresh one and commits on exit.
    """
    effective_readonly = readonly or is_readonly_forced()
    existing = get_current_session(readonly=effective_readonly)

    if existing:
        yield existing
        return

    async with _session_factory(effective_readonly)() as session:
        try:
            yield session
            if not effective_readonly:
                await session.commit()
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
