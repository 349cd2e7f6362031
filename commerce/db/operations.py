# commerce/db/operations.py
"""Common sync/async session helpers."""

from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

T = TypeVar("T")


async def flush_async(session: AsyncSession) -> None:
    """Flush every pending change tracked by the session."""
    await session.flush()


async def run_sync(session: AsyncSession, func: Callable[[Session], T], *args: Any, **kwargs: Any) -> T:
    """Execute a synchronous callable against the session within run_sync."""
    def _runner(sync_session: Session) -> T:
        return func(sync_session, *args, **kwargs)

    return await session.run_sync(_runner)
