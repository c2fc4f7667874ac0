"""
Journal service for trade days and trade entries.

Provides the business logic behind the calendar: logging and editing trade
entries, saving per-day notes, and summing entry P/L into daily totals.

Daily P/L is never stored. Every read sums the current entry rows of the
day, so a day record with notes and no entries reports a P/L of 0.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import DatabaseError
from ..models.trade import Trade
from ..models.trade_entry import TradeEntry
from ..schemas.trade import DaySummary, MonthDaySummary, month_prefix
from ..schemas.trade_entry import TradeEntryCreate, TradeEntryUpdate

logger = logging.getLogger(__name__)


def _dialect_insert(db: AsyncSession) -> Callable[..., Any]:
    """Return the dialect-specific ``insert`` that supports ON CONFLICT."""
    if db.get_bind().dialect.name == "postgresql":
        return postgresql.insert
    return sqlite.insert


class JournalService:
    """Service for journal days and their trade entries."""

    async def _run_write(self, db: AsyncSession, action: str, operation):
        """Run ``operation`` and commit; roll back and wrap storage failures."""
        try:
            result = await operation()
            await db.commit()
            return result
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Database error during {action}: {e}", exc_info=True, extra={"action": action})
            raise DatabaseError(f"Failed to {action.replace('_', ' ')}") from e

    async def _ensure_trade_day(self, db: AsyncSession, user_id: int, trade_date: str) -> None:
        """Insert the day record if missing and flag it as having trades."""
        insert = _dialect_insert(db)
        stmt = insert(Trade).values(user_id=user_id, trade_date=trade_date, notes="", has_trades=True)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Trade.user_id, Trade.trade_date],
            set_={"has_trades": True},
        )
        await db.execute(stmt)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def create_entry(self, db: AsyncSession, user_id: int, data: TradeEntryCreate) -> int:
        """
        Log a trade entry.

        The parent day record is ensured and the entry inserted in the same
        transaction, so an entry can never exist without its day.

        Args:
            db: Database session
            user_id: Owner of the entry
            data: Validated entry fields

        Returns:
            ID of the new entry

        Raises:
            DatabaseError: If the write fails
        """

        async def operation() -> int:
            await self._ensure_trade_day(db, user_id, data.trade_date)
            entry = TradeEntry(user_id=user_id, **data.model_dump())
            db.add(entry)
            await db.flush()
            return entry.id

        entry_id = await self._run_write(db, "create_entry", operation)
        logger.info(
            f"Created trade entry {entry_id}",
            extra={"action": "create_entry", "user_id": user_id, "entry_id": entry_id, "trade_date": data.trade_date},
        )
        return entry_id

    async def list_entries_for_date(self, db: AsyncSession, user_id: int, trade_date: str) -> List[TradeEntry]:
        """All entries of a day, newest first."""
        result = await db.execute(
            select(TradeEntry)
            .where(TradeEntry.user_id == user_id, TradeEntry.trade_date == trade_date)
            .order_by(TradeEntry.created_at.desc(), TradeEntry.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_entries_for_month(
        self, db: AsyncSession, user_id: int, year: int, month: int
    ) -> Dict[str, List[TradeEntry]]:
        """
        All entries of a month keyed by trade date, fetched in one query.

        Dates come out in calendar order; entries within a date newest first.
        """
        prefix = month_prefix(year, month)
        result = await db.execute(
            select(TradeEntry)
            .where(TradeEntry.user_id == user_id, TradeEntry.trade_date.like(f"{prefix}-%"))
            .order_by(TradeEntry.trade_date, TradeEntry.created_at.desc(), TradeEntry.id.desc())
            .execution_options(populate_existing=True)
        )

        grouped: Dict[str, List[TradeEntry]] = defaultdict(list)
        for entry in result.scalars():
            grouped[entry.trade_date].append(entry)
        return dict(grouped)

    async def update_entry(
        self, db: AsyncSession, user_id: int, entry_id: int, data: TradeEntryUpdate
    ) -> int:
        """
        Replace the mutable fields of an entry owned by ``user_id``.

        Returns:
            Number of rows changed; 0 when the id is unknown or belongs to
            another user. That case is not an error.
        """

        async def operation() -> int:
            result = await db.execute(
                update(TradeEntry)
                .where(TradeEntry.id == entry_id, TradeEntry.user_id == user_id)
                .values(**data.model_dump(), updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        changed = await self._run_write(db, "update_entry", operation)
        logger.info(
            f"Updated trade entry {entry_id}",
            extra={"action": "update_entry", "user_id": user_id, "entry_id": entry_id, "rows": changed},
        )
        return changed

    async def delete_entry(self, db: AsyncSession, user_id: int, entry_id: int) -> int:
        """
        Delete an entry owned by ``user_id``.

        The day record and its notes stay; its ``has_trades`` flag is cleared
        once no entries remain.

        Returns:
            Number of rows deleted; 0 when the id is unknown or foreign.
        """

        async def operation() -> int:
            found = await db.execute(
                select(TradeEntry.trade_date).where(TradeEntry.id == entry_id, TradeEntry.user_id == user_id)
            )
            trade_date: Optional[str] = found.scalar_one_or_none()
            if trade_date is None:
                return 0

            result = await db.execute(
                delete(TradeEntry)
                .where(TradeEntry.id == entry_id, TradeEntry.user_id == user_id)
                .execution_options(synchronize_session=False)
            )
            remaining = (
                select(TradeEntry.id)
                .where(TradeEntry.user_id == user_id, TradeEntry.trade_date == trade_date)
                .exists()
            )
            await db.execute(
                update(Trade)
                .where(Trade.user_id == user_id, Trade.trade_date == trade_date)
                .values(has_trades=remaining)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        deleted = await self._run_write(db, "delete_entry", operation)
        logger.info(
            f"Deleted trade entry {entry_id}",
            extra={"action": "delete_entry", "user_id": user_id, "entry_id": entry_id, "rows": deleted},
        )
        return deleted

    # ------------------------------------------------------------------
    # Days
    # ------------------------------------------------------------------

    async def save_day_notes(self, db: AsyncSession, user_id: int, trade_date: str, notes: str) -> None:
        """Upsert the notes of a day; ``has_trades`` and entries are left alone."""

        async def operation() -> None:
            insert = _dialect_insert(db)
            stmt = insert(Trade).values(user_id=user_id, trade_date=trade_date, notes=notes, has_trades=False)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Trade.user_id, Trade.trade_date],
                set_={"notes": stmt.excluded.notes, "updated_at": func.now()},
            )
            await db.execute(stmt)

        await self._run_write(db, "save_day_notes", operation)
        logger.info(
            f"Saved notes for {trade_date}",
            extra={"action": "save_day_notes", "user_id": user_id, "trade_date": trade_date},
        )

    def _summary_query(self, user_id: int):
        pl = func.coalesce(func.sum(TradeEntry.pnl), 0.0).label("pl")
        return (
            select(Trade.trade_date, pl, Trade.notes)
            .select_from(Trade)
            .outerjoin(
                TradeEntry,
                and_(TradeEntry.user_id == Trade.user_id, TradeEntry.trade_date == Trade.trade_date),
            )
            .where(Trade.user_id == user_id)
            .group_by(Trade.id, Trade.trade_date, Trade.notes)
        )

    async def get_month_summary(
        self, db: AsyncSession, user_id: int, year: int, month: int
    ) -> List[MonthDaySummary]:
        """
        Daily P/L and notes for every day record in a month.

        Days with notes but no entries are included with ``pl == 0``.
        """
        prefix = month_prefix(year, month)
        stmt = self._summary_query(user_id).where(Trade.trade_date.like(f"{prefix}-%")).order_by(Trade.trade_date)
        result = await db.execute(stmt)
        return [
            MonthDaySummary(trade_date=row.trade_date, pl=float(row.pl), notes=row.notes or "")
            for row in result
        ]

    async def get_day_summary(self, db: AsyncSession, user_id: int, trade_date: str) -> Optional[DaySummary]:
        """P/L and notes of one day, or None when the day has no record."""
        stmt = self._summary_query(user_id).where(Trade.trade_date == trade_date)
        row = (await db.execute(stmt)).first()
        if row is None:
            return None
        return DaySummary(pl=float(row.pl), notes=row.notes or "")


journal_service = JournalService()
