"""Async sessions over the shared engine."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.app.core.db.engine import get_engine


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Open a session that keeps loaded rows usable after commit.

    Nothing is committed here: services own their transaction boundaries, and
    anything left uncommitted when the block exits is rolled back on close.
    """
    async with AsyncSession(
        engine or get_engine(), expire_on_commit=False, autoflush=False
    ) as session:
        yield session
