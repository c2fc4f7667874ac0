"""
Database module for the Trading Journal application.

Exports database session management and utilities.
"""

from .session import (
    check_db_health,
    close_db,
    get_async_engine,
    get_db,
    get_session_factory,
    init_db,
)

__all__ = [
    "get_async_engine",
    "get_session_factory",
    "init_db",
    "get_db",
    "close_db",
    "check_db_health",
]
