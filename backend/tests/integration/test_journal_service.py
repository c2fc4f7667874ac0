"""
Integration tests for the journal service against a real SQLite database.

Checks the aggregation and consistency rules every handler relies on:
daily P/L is always the sum of the day's entries, day records are created
alongside entries, and writes are scoped to their owner.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from tradejournal.models.enums import Direction, SetupQuality
from tradejournal.models.trade import Trade
from tradejournal.models.trade_entry import TradeEntry
from tradejournal.schemas.trade_entry import TradeEntryCreate, TradeEntryUpdate
from tradejournal.services.journal_service import JournalService


@pytest.fixture
def service():
    return JournalService()


def _entry(trade_date="2024-03-05", ticker="AAPL", pnl=100.0, **fields):
    return TradeEntryCreate(trade_date=trade_date, ticker=ticker, pnl=pnl, **fields)


async def _trade_rows(db, user_id, trade_date):
    result = await db.execute(
        select(Trade).where(Trade.user_id == user_id, Trade.trade_date == trade_date)
    )
    return result.scalars().all()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_creating_entry_creates_exactly_one_day_record(service, db_session, user):
    assert await _trade_rows(db_session, user.id, "2024-03-05") == []

    await service.create_entry(db_session, user.id, _entry(pnl=10))
    await service.create_entry(db_session, user.id, _entry(pnl=20))

    rows = await _trade_rows(db_session, user.id, "2024-03-05")
    assert len(rows) == 1
    assert rows[0].notes == ""
    assert rows[0].has_trades is True


@pytest.mark.integration
@pytest.mark.asyncio
async def test_daily_pl_is_sum_of_entries(service, db_session, user):
    for pnl in (150.5, -50.25, 20.0):
        await service.create_entry(db_session, user.id, _entry(pnl=pnl))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-03-06", pnl=7))

    summary = await service.get_day_summary(db_session, user.id, "2024-03-05")
    month = await service.get_month_summary(db_session, user.id, 2024, 3)

    assert summary.pl == pytest.approx(120.25)
    assert [(row.trade_date, row.pl) for row in month] == [
        ("2024-03-05", pytest.approx(120.25)),
        ("2024-03-06", pytest.approx(7.0)),
    ]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_notes_only_day_reports_zero_pl(service, db_session, user):
    await service.save_day_notes(db_session, user.id, "2024-03-07", "sat on hands")

    summary = await service.get_day_summary(db_session, user.id, "2024-03-07")
    month = await service.get_month_summary(db_session, user.id, 2024, 3)

    assert summary.pl == 0
    assert summary.notes == "sat on hands"
    assert [(row.trade_date, row.pl, row.notes) for row in month] == [("2024-03-07", 0.0, "sat on hands")]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_day_has_no_summary(service, db_session, user):
    assert await service.get_day_summary(db_session, user.id, "2024-03-05") is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_month_summary_only_covers_requested_month(service, db_session, user):
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-02-29", pnl=1))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-03-01", pnl=2))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-04-01", pnl=3))
    await service.create_entry(db_session, user.id, _entry(trade_date="2023-03-15", pnl=4))

    month = await service.get_month_summary(db_session, user.id, 2024, 3)

    assert [row.trade_date for row in month] == ["2024-03-01"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_saving_notes_twice_keeps_one_row_with_latest_notes(service, db_session, user):
    await service.save_day_notes(db_session, user.id, "2024-03-05", "first")
    await service.save_day_notes(db_session, user.id, "2024-03-05", "second")

    rows = await _trade_rows(db_session, user.id, "2024-03-05")
    assert len(rows) == 1
    assert rows[0].notes == "second"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_notes_save_leaves_entries_and_flag_alone(service, db_session, user):
    await service.create_entry(db_session, user.id, _entry(pnl=150.5))
    await service.save_day_notes(db_session, user.id, "2024-03-05", "good day")

    summary = await service.get_day_summary(db_session, user.id, "2024-03-05")
    rows = await _trade_rows(db_session, user.id, "2024-03-05")

    assert summary.pl == pytest.approx(150.5)
    assert summary.notes == "good day"
    assert rows[0].has_trades is True


@pytest.mark.integration
@pytest.mark.asyncio
async def test_entry_after_notes_keeps_notes(service, db_session, user):
    await service.save_day_notes(db_session, user.id, "2024-03-05", "plan: only A setups")
    await service.create_entry(db_session, user.id, _entry(pnl=-30))

    summary = await service.get_day_summary(db_session, user.id, "2024-03-05")

    assert summary.notes == "plan: only A setups"
    assert summary.pl == pytest.approx(-30)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_deleting_all_entries_zeroes_pl_and_keeps_notes(service, db_session, user):
    first = await service.create_entry(db_session, user.id, _entry(pnl=10))
    second = await service.create_entry(db_session, user.id, _entry(pnl=15))
    await service.save_day_notes(db_session, user.id, "2024-03-05", "keep me")

    assert await service.delete_entry(db_session, user.id, first) == 1
    assert await service.delete_entry(db_session, user.id, second) == 1

    summary = await service.get_day_summary(db_session, user.id, "2024-03-05")
    rows = await _trade_rows(db_session, user.id, "2024-03-05")
    assert summary.pl == 0
    assert summary.notes == "keep me"
    assert rows[0].has_trades is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_replaces_fields(service, db_session, user):
    entry_id = await service.create_entry(
        db_session, user.id, _entry(pnl=10, tag="breakout", confidence=2, setup_quality="C")
    )

    changed = await service.update_entry(
        db_session,
        user.id,
        entry_id,
        TradeEntryUpdate(ticker="TSLA", pnl=-5, direction="SHORT", setup_quality="A"),
    )

    entries = await service.list_entries_for_date(db_session, user.id, "2024-03-05")
    assert changed == 1
    assert len(entries) == 1
    entry = entries[0]
    assert entry.ticker == "TSLA"
    assert entry.pnl == -5
    assert entry.direction is Direction.SHORT
    assert entry.setup_quality is SetupQuality.A
    assert entry.tag is None
    assert entry.confidence is None
    assert entry.trade_date == "2024-03-05"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_foreign_update_and_delete_are_silent_no_ops(service, db_session, user, other_user):
    entry_id = await service.create_entry(db_session, user.id, _entry(pnl=10))

    changed = await service.update_entry(
        db_session, other_user.id, entry_id, TradeEntryUpdate(ticker="HACK", pnl=-999)
    )
    deleted = await service.delete_entry(db_session, other_user.id, entry_id)

    assert changed == 0
    assert deleted == 0
    entries = await service.list_entries_for_date(db_session, user.id, "2024-03-05")
    assert [(e.ticker, e.pnl) for e in entries] == [("AAPL", 10)]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_ids_are_silent_no_ops(service, db_session, user):
    assert await service.update_entry(db_session, user.id, 12345, TradeEntryUpdate(ticker="X", pnl=1)) == 0
    assert await service.delete_entry(db_session, user.id, 12345) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_users_do_not_see_each_others_days(service, db_session, user, other_user):
    await service.create_entry(db_session, user.id, _entry(pnl=10))
    await service.create_entry(db_session, other_user.id, _entry(pnl=1000))

    mine = await service.get_day_summary(db_session, user.id, "2024-03-05")
    theirs = await service.get_day_summary(db_session, other_user.id, "2024-03-05")

    assert mine.pl == pytest.approx(10)
    assert theirs.pl == pytest.approx(1000)
    assert len(await service.list_entries_for_date(db_session, user.id, "2024-03-05")) == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_entries_newest_first(service, db_session, user):
    ids = [await service.create_entry(db_session, user.id, _entry(ticker=t)) for t in ("A", "B", "C")]

    entries = await service.list_entries_for_date(db_session, user.id, "2024-03-05")

    assert [e.id for e in entries] == list(reversed(ids))


@pytest.mark.integration
@pytest.mark.asyncio
async def test_month_entries_grouped_by_date(service, db_session, user):
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-03-05", ticker="A"))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-03-01", ticker="B"))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-03-05", ticker="C"))
    await service.create_entry(db_session, user.id, _entry(trade_date="2024-04-05", ticker="D"))

    grouped = await service.list_entries_for_month(db_session, user.id, 2024, 3)

    assert list(grouped) == ["2024-03-01", "2024-03-05"]
    assert [e.ticker for e in grouped["2024-03-05"]] == ["C", "A"]
    assert [e.ticker for e in grouped["2024-03-01"]] == ["B"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_entry_cannot_exist_without_day_record(db_session, user):
    """The composite foreign key rejects an entry whose day record is missing."""
    db_session.add(TradeEntry(user_id=user.id, trade_date="2024-03-05", ticker="AAPL", pnl=1.0))
    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()

    count = await db_session.execute(select(func.count(TradeEntry.id)))
    assert count.scalar() == 0
