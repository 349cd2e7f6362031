# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import os
from typing import Generator
import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ASYNC_DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from commerce.db.session import Base, SessionLocal, engine
from commerce.db.session_async import AsyncSessionLocal
import commerce.models.product  # noqa: F401
from commerce.models.user import User

# ---------- Fixtures ----------
@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create the SQLite tables once per test session."""
    import commerce.models.facet  # noqa: F401
    import commerce.models.location  # noqa: F401
    import commerce.models.coupon  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest_asyncio.fixture(scope="function")
async def async_db_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()

@pytest.fixture(scope="function")
def merchant(db_session: Session) -> User:
    user = User(name="Demo Merchant", email=f"merchant-{uuid.uuid4()}@demo.test")
    db_session.add(user)
    db_session.commit()
    return user
