"""
Trade model for journal days.

One row per user per calendar day. Holds the day's notes; the day's P/L is
never stored here and is always summed from the entries.
"""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel

NOTES_MAX_LENGTH = 4000


class Trade(BaseModel):
    """Per-user, per-day journal record."""

    __tablename__ = "trades"
    __table_args__ = (
        UniqueConstraint("user_id", "trade_date", name="uq_trades_user_date"),
        Index("idx_trades_user_date", "user_id", "trade_date"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    trade_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    notes: Mapped[str] = mapped_column(Text, default="", server_default="", nullable=False)
    has_trades: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Trade(id={self.id}, user_id={self.user_id}, trade_date={self.trade_date})>"
