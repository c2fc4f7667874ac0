"""
Trade entry model for individual logged trades.

Every entry belongs to the journal day identified by its
``(user_id, trade_date)`` pair.
"""

from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Enum,
    Float,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .enums import Direction, SetupQuality


class TradeEntry(BaseModel):
    """A single logged trade with its own P/L."""

    __tablename__ = "trade_entries"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id", "trade_date"],
            ["trades.user_id", "trades.trade_date"],
            ondelete="CASCADE",
            name="fk_trade_entries_trade_day",
        ),
        CheckConstraint("confidence BETWEEN 1 AND 5", name="ck_trade_entries_confidence"),
        CheckConstraint("size >= 0", name="ck_trade_entries_size"),
        Index("idx_entries_user_date", "user_id", "trade_date"),
        Index("idx_entries_ticker", "ticker"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    trade_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD

    # Trade details
    ticker: Mapped[str] = mapped_column(String(32), nullable=False)
    direction: Mapped[Direction] = mapped_column(
        Enum(Direction, native_enum=False, create_constraint=True, length=5, name="direction"),
        default=Direction.LONG,
        nullable=False,
    )
    entry_price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    exit_price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    size: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    pnl: Mapped[float] = mapped_column(Float, nullable=False)

    # Journal metadata
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    tag: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    confidence: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # 1..5
    setup_quality: Mapped[Optional[SetupQuality]] = mapped_column(
        Enum(SetupQuality, native_enum=False, create_constraint=True, length=1, name="setup_quality"),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<TradeEntry(id={self.id}, ticker={self.ticker}, pnl={self.pnl})>"
