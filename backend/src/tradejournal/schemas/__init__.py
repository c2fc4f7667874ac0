"""
Pydantic schemas for request/response validation.
"""

from .auth import LoginRequest, ProvidersResponse, RegisterRequest, Token
from .base import BaseSchema, BaseUpdateSchema, SuccessResponse
from .trade import (
    DayNotesSave,
    DayResponse,
    DaySummary,
    MonthDaySummary,
    MonthSummaryResponse,
    month_prefix,
    validate_trade_date,
)
from .trade_entry import (
    EntryCreatedResponse,
    EntryListResponse,
    EntryMonthResponse,
    TradeEntryCreate,
    TradeEntryRead,
    TradeEntryUpdate,
)
from .user import UserProfileUpdate, UserRead

__all__ = [
    "BaseSchema",
    "BaseUpdateSchema",
    "SuccessResponse",
    "Token",
    "RegisterRequest",
    "LoginRequest",
    "ProvidersResponse",
    "DayNotesSave",
    "DayResponse",
    "DaySummary",
    "MonthDaySummary",
    "MonthSummaryResponse",
    "month_prefix",
    "validate_trade_date",
    "TradeEntryCreate",
    "TradeEntryUpdate",
    "TradeEntryRead",
    "EntryCreatedResponse",
    "EntryListResponse",
    "EntryMonthResponse",
    "UserRead",
    "UserProfileUpdate",
]
