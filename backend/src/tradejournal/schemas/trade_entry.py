"""
Trade entry schemas for request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.enums import Direction, SetupQuality
from ..models.trade import NOTES_MAX_LENGTH
from .base import BaseUpdateSchema
from .trade import validate_trade_date


class TradeEntryUpdate(BaseUpdateSchema):
    """
    Mutable fields of a trade entry.

    ``ticker`` and ``pnl`` are required; everything else falls back to its
    column default, so an update replaces the whole entry.
    """

    ticker: str = Field(..., min_length=1, max_length=32, description="Instrument symbol")
    direction: Direction = Field(default=Direction.LONG, description="LONG or SHORT")
    entry_price: float = Field(default=0.0, allow_inf_nan=False)
    exit_price: float = Field(default=0.0, allow_inf_nan=False)
    size: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Position size")
    pnl: float = Field(..., allow_inf_nan=False, description="Realized profit/loss")
    notes: str = Field(default="", max_length=NOTES_MAX_LENGTH)
    tag: Optional[str] = Field(default=None, max_length=50)
    confidence: Optional[int] = Field(default=None, ge=1, le=5, description="Confidence from 1 to 5")
    setup_quality: Optional[SetupQuality] = Field(default=None, description="Setup grade: A, B or C")

    @field_validator("ticker", mode="before")
    @classmethod
    def _strip_ticker(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("entry_price", "exit_price", "size", mode="before")
    @classmethod
    def _missing_number_as_zero(cls, value):
        if value is None or value == "":
            return 0.0
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("tag", "confidence", "setup_quality", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        # HTML forms submit untouched selects as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TradeEntryCreate(TradeEntryUpdate):
    """Schema for logging a new trade entry."""

    trade_date: str = Field(..., description="Trade date (YYYY-MM-DD)")

    @field_validator("trade_date")
    @classmethod
    def _check_trade_date(cls, value: str) -> str:
        return validate_trade_date(value)


class TradeEntryRead(BaseModel):
    """Schema for reading a trade entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    trade_date: str
    ticker: str
    direction: Direction
    entry_price: float
    exit_price: float
    size: float
    pnl: float
    notes: str
    tag: Optional[str] = None
    confidence: Optional[int] = None
    setup_quality: Optional[SetupQuality] = None
    created_at: Optional[datetime] = None


class EntryCreatedResponse(BaseModel):
    success: bool = True
    id: int


class EntryListResponse(BaseModel):
    """Entries of one day, newest first."""

    data: list[TradeEntryRead]


class EntryMonthResponse(BaseModel):
    """Entries of one month keyed by trade date."""

    data: dict[str, list[TradeEntryRead]]
