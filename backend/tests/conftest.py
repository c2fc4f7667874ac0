"""
Test configuration and fixtures.

Provides common fixtures and setup for all tests. Every test that touches the
database gets its own SQLite file under pytest's ``tmp_path``.
"""

import os
from typing import Awaitable, Callable, Optional

import pytest
import pytest_asyncio

# Set testing environment before importing app modules
os.environ["ENVIRONMENT"] = "testing"

from httpx import ASGITransport, AsyncClient

from tradejournal.core.security import create_user_token
from tradejournal.db import session as db_session_module
from tradejournal.db.init_tables import create_tables
from tradejournal.db.session import close_db, get_async_engine, get_session_factory, init_db
from tradejournal.models.user import User


@pytest_asyncio.fixture(scope="function")
async def db_session_factory(tmp_path):
    """Create a database session factory bound to a fresh SQLite file."""
    # A global engine left over from a previous test belongs to a closed
    # event loop and cannot be disposed here, so it is simply dropped.
    if db_session_module.async_engine is not None:
        db_session_module.async_engine = None
        db_session_module.AsyncSessionLocal = None

    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'test_trades.db'}")
    await create_tables(get_async_engine())
    try:
        yield get_session_factory()
    finally:
        await close_db()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory):
    """Create a database session for testing."""
    async with db_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(db_session) -> Callable[..., Awaitable[User]]:
    """Factory creating users directly in the database."""

    async def _make_user(email: Optional[str] = None, **fields) -> User:
        user = User(email=email, **fields)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest_asyncio.fixture
async def user(make_user) -> User:
    return await make_user("trader@example.com", display_name="Trader")


@pytest_asyncio.fixture
async def other_user(make_user) -> User:
    return await make_user("rival@example.com", display_name="Rival")


@pytest.fixture
def auth_headers():
    """Build an Authorization header carrying a token for the given user."""

    def _get_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _get_headers


@pytest_asyncio.fixture
async def client(db_session_factory):
    """Async HTTP client talking to the app in-process."""
    from tradejournal.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
