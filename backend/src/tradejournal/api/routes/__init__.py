"""
API routes for the Trading Journal application.

Exports all route modules for easy importing.
"""

from . import auth, entries, trades, users

__all__ = [
    "auth",
    "entries",
    "trades",
    "users",
]
