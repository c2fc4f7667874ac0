"""
SQLAlchemy ORM models for the Trading Journal application.

Exports all models for easy importing.
"""

from .base import Base, BaseModel
from .enums import Direction, SetupQuality
from .trade import Trade
from .trade_entry import TradeEntry
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "Direction",
    "SetupQuality",
    "Trade",
    "TradeEntry",
    "User",
]
