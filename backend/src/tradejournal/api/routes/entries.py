"""
API routes for trade entries.

Provides endpoints for logging, listing, editing and deleting individual
trades. Every query is scoped to the signed-in user: editing or deleting an
entry id that is unknown or owned by someone else succeeds without effect.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import DatabaseError
from ...core.logging import get_logger
from ...core.security import CurrentUser
from ...db.session import get_db
from ...schemas.base import SuccessResponse
from ...schemas.trade_entry import (
    EntryCreatedResponse,
    EntryListResponse,
    EntryMonthResponse,
    TradeEntryCreate,
    TradeEntryRead,
    TradeEntryUpdate,
)
from ...services.journal_service import journal_service
from ..deps import Month, TradeDate

logger = get_logger(__name__)

router = APIRouter(prefix="/api/entries", tags=["Trade Entries"])


@router.get("/month", response_model=EntryMonthResponse)
async def list_month_entries(
    params: Month,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EntryMonthResponse:
    """All entries of a month grouped by date."""
    try:
        grouped = await journal_service.list_entries_for_month(db, current_user.id, params.year, params.month)
        return EntryMonthResponse(
            data={
                trade_date: [TradeEntryRead.model_validate(e) for e in entries]
                for trade_date, entries in grouped.items()
            }
        )
    except Exception as e:
        logger.error(f"Error listing entries for {params.year}-{params.month}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list entries") from e


@router.get("/{date}", response_model=EntryListResponse)
async def list_day_entries(
    trade_date: TradeDate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EntryListResponse:
    """All entries of a day, newest first."""
    try:
        entries = await journal_service.list_entries_for_date(db, current_user.id, trade_date)
        return EntryListResponse(data=[TradeEntryRead.model_validate(e) for e in entries])
    except Exception as e:
        logger.error(f"Error listing entries for {trade_date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list entries") from e


@router.post("", response_model=EntryCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: TradeEntryCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EntryCreatedResponse:
    """Log a new trade entry; the day record is created alongside it if missing."""
    try:
        entry_id = await journal_service.create_entry(db, current_user.id, entry_data)
        return EntryCreatedResponse(id=entry_id)
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail="Failed to create entry") from e


@router.put("/{entry_id}", response_model=SuccessResponse)
async def update_entry(
    entry_id: int,
    entry_data: TradeEntryUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuccessResponse:
    """Replace an entry's fields. Success does not imply the entry exists."""
    try:
        await journal_service.update_entry(db, current_user.id, entry_id, entry_data)
        return SuccessResponse()
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail="Failed to update entry") from e


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def delete_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuccessResponse:
    """Delete an entry. Success does not imply the entry existed."""
    try:
        await journal_service.delete_entry(db, current_user.id, entry_id)
        return SuccessResponse()
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail="Failed to delete entry") from e
