"""
Journal day schemas: notes payloads and aggregated P/L responses.
"""

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models.trade import NOTES_MAX_LENGTH

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_trade_date(value: str) -> str:
    """
    Check that ``value`` is a real calendar date written as YYYY-MM-DD.

    Raises:
        ValueError: If the format or the date itself is invalid
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError("Date must use the YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid calendar date: {value}") from e
    return value


def month_prefix(year: int, month: int) -> str:
    """Build the ``YYYY-MM`` prefix matched against stored trade dates."""
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    return f"{year:04d}-{month:02d}"


class DayNotesSave(BaseModel):
    """Body of a notes save. Any other field (such as a legacy ``pl``) is ignored."""

    notes: str = Field(default="", max_length=NOTES_MAX_LENGTH, description="Free-text notes for the day")

    @field_validator("notes", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class DaySummary(BaseModel):
    """Aggregated view of a single journal day."""

    pl: float
    notes: str


class DayResponse(BaseModel):
    """Response for a single day lookup; ``data`` is null when no day record exists."""

    date: str
    data: Optional[DaySummary] = None


class MonthDaySummary(BaseModel):
    """One row of the month calendar."""

    trade_date: str
    pl: float
    notes: str


class MonthSummaryResponse(BaseModel):
    data: list[MonthDaySummary]
