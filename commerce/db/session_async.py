# commerce/db/session_async.py
"""Async SQLAlchemy session utilities."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)

from commerce.core.config import settings

async_engine: AsyncEngine = create_async_engine(
    settings.ASYNC_DATABASE_URL,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    expire_on_commit=False,
    autoflush=False,
)

