"""
Database session management for SQLAlchemy.

Provides engine creation, session factory, and async session support.
The default store is an embedded SQLite file (aiosqlite driver); PostgreSQL
URLs are served through asyncpg.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..core.config import config
from ..core.logging import get_logger

logger = get_logger(__name__)


# Process-wide engine and session factory, set by init_db()
async_engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def get_async_engine() -> AsyncEngine:
    """Engine created by init_db(); RuntimeError before that."""
    if async_engine is None:
        raise RuntimeError("Database engine not initialized. Call init_db() first.")
    return async_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory created by init_db(); RuntimeError before that."""
    if AsyncSessionLocal is None:
        raise RuntimeError("Database session factory not initialized. Call init_db() first.")
    return AsyncSessionLocal


def to_async_url(database_url: str) -> str:
    """Rewrite a plain database URL to use an async driver."""
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _create_async_engine(database_url: str) -> AsyncEngine:
    """Create asynchronous SQLAlchemy engine (internal use only)."""
    database_url = to_async_url(database_url)

    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=config.DATABASE_ECHO)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(
            database_url,
            echo=config.DATABASE_ECHO,
            pool_size=config.DATABASE_POOL_SIZE,
            max_overflow=config.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=3600,  # Recycle connections after 1 hour
        )

    logger.info(f"Created async engine: {engine.url.render_as_string(hide_password=True)}")
    return engine


async def init_db(database_url: Optional[str] = None) -> None:
    """Initialize database engine and session factory."""
    global async_engine, AsyncSessionLocal

    try:
        # Only create engine if not already initialized
        if async_engine is None:
            async_engine = _create_async_engine(database_url or config.DATABASE_URL)
            AsyncSessionLocal = async_sessionmaker(
                async_engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.info("Database engine and session factory initialized")
        else:
            logger.info("Database already initialized, skipping")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        async_engine = None
        AsyncSessionLocal = None
        raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    session_factory = get_session_factory()

    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            await session.close()


async def close_db() -> None:
    """Close database engine."""
    global async_engine, AsyncSessionLocal

    if async_engine:
        try:
            await async_engine.dispose()
        except Exception as e:
            logger.warning(f"Error disposing database engine: {e}")
        finally:
            async_engine = None
            AsyncSessionLocal = None
            logger.info("Database engine closed")


# Health check
async def check_db_health() -> bool:
    """Check database connection health."""
    try:
        engine = get_async_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        return True
    except RuntimeError:
        # Engine not initialized
        return False
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
