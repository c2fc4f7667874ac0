"""
API routes for journal days.

Provides the calendar month view (daily P/L and notes), single-day lookups,
and the per-day notes save.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import DatabaseError
from ...core.logging import get_logger
from ...core.security import CurrentUser
from ...db.session import get_db
from ...schemas.base import SuccessResponse
from ...schemas.trade import DayNotesSave, DayResponse, MonthSummaryResponse
from ...services.journal_service import journal_service
from ..deps import Month, TradeDate

logger = get_logger(__name__)

router = APIRouter(prefix="/api/trades", tags=["Journal Days"])


@router.get("", response_model=MonthSummaryResponse)
async def get_month(
    params: Month,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MonthSummaryResponse:
    """
    Daily P/L and notes for every journal day of a month.

    ``pl`` is the sum of the day's entry P/L; days with notes but no entries
    report 0.
    """
    try:
        rows = await journal_service.get_month_summary(db, current_user.id, params.year, params.month)
        return MonthSummaryResponse(data=rows)
    except Exception as e:
        logger.error(f"Error loading month {params.year}-{params.month}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load trades") from e


@router.get("/{date}", response_model=DayResponse)
async def get_day(
    trade_date: TradeDate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DayResponse:
    """Get the P/L and notes of one day; ``data`` is null when nothing was logged."""
    try:
        summary = await journal_service.get_day_summary(db, current_user.id, trade_date)
        return DayResponse(date=trade_date, data=summary)
    except Exception as e:
        logger.error(f"Error loading day {trade_date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load trade day") from e


@router.post("/{date}", response_model=SuccessResponse)
async def save_day_notes(
    trade_date: TradeDate,
    payload: DayNotesSave,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuccessResponse:
    """Save the notes of a day, creating the day record if needed."""
    try:
        await journal_service.save_day_notes(db, current_user.id, trade_date, payload.notes)
        return SuccessResponse()
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail="Failed to save notes") from e
