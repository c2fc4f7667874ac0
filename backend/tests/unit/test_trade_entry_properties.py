"""
Property-based tests for trade entry validation.

Tests universal properties of the entry and date rules across generated
inputs: any finite P/L is kept as given, non-finite P/L and out-of-range
confidence never pass, and only zero-padded calendar dates are accepted.
"""

import math
from datetime import date

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st
from pydantic import ValidationError

from tradejournal.schemas.trade import month_prefix, validate_trade_date
from tradejournal.schemas.trade_entry import TradeEntryCreate, TradeEntryUpdate

finite_floats = st.floats(allow_nan=False, allow_infinity=False)
journal_dates = st.dates(min_value=date(1000, 1, 1), max_value=date(9999, 12, 31))


@pytest.mark.unit
@given(pnl=finite_floats, size=st.floats(min_value=0, allow_infinity=False))
def test_finite_pnl_is_preserved(pnl, size):
    entry = TradeEntryCreate(trade_date="2024-03-05", ticker="AAPL", pnl=pnl, size=size)

    assert entry.pnl == pnl
    assert entry.size == size


@pytest.mark.unit
@given(pnl=st.sampled_from([math.nan, math.inf, -math.inf]))
def test_non_finite_pnl_is_rejected(pnl):
    with pytest.raises(ValidationError):
        TradeEntryUpdate(ticker="AAPL", pnl=pnl)


@pytest.mark.unit
@given(confidence=st.integers(min_value=1, max_value=5))
def test_confidence_in_range_is_accepted(confidence):
    assert TradeEntryUpdate(ticker="AAPL", pnl=0, confidence=confidence).confidence == confidence


@pytest.mark.unit
@given(confidence=st.one_of(st.integers(max_value=0), st.integers(min_value=6)))
def test_confidence_out_of_range_is_rejected(confidence):
    with pytest.raises(ValidationError):
        TradeEntryUpdate(ticker="AAPL", pnl=0, confidence=confidence)


@pytest.mark.unit
@given(size=st.floats(max_value=-1e-9, allow_infinity=False, allow_nan=False))
def test_negative_size_is_rejected(size):
    with pytest.raises(ValidationError):
        TradeEntryUpdate(ticker="AAPL", pnl=0, size=size)


@pytest.mark.unit
@given(day=journal_dates)
def test_iso_dates_are_accepted(day):
    text = day.isoformat()

    assert validate_trade_date(text) == text
    assert text.startswith(month_prefix(day.year, day.month) + "-")


@pytest.mark.unit
@given(day=journal_dates)
def test_unpadded_dates_are_rejected(day):
    assume(day.month < 10 or day.day < 10)

    with pytest.raises(ValueError):
        validate_trade_date(f"{day.year}-{day.month}-{day.day}")
