"""
Initialize database tables using SQLAlchemy models.

Creates every table and index declared on the models. Safe to run against an
existing database: tables that already exist are left alone.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from ..core.logging import get_logger
from ..models import Base
from .session import close_db, get_async_engine, init_db

logger = get_logger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables in the database."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise


async def init_tables() -> None:
    """Create all tables using the configured database URL."""
    await init_db()
    try:
        await create_tables(get_async_engine())
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(init_tables())
