"""
Shared request dependencies for journal routes.
"""

from typing import Annotated

from fastapi import Depends, Path, Query

from ..core.exceptions import ValidationError, to_http_exception
from ..schemas.trade import validate_trade_date


def trade_date_param(date: Annotated[str, Path(description="Trade date (YYYY-MM-DD)")]) -> str:
    """Validate the ``{date}`` path segment as a strict YYYY-MM-DD date."""
    try:
        return validate_trade_date(date)
    except ValueError as e:
        raise to_http_exception(ValidationError(str(e))) from e


class MonthParams:
    """``year`` and 1-based ``month`` query parameters of calendar views."""

    def __init__(
        self,
        year: Annotated[int, Query(ge=1000, le=9999, description="Four-digit year")],
        month: Annotated[int, Query(ge=1, le=12, description="Month, 1-12")],
    ):
        self.year = year
        self.month = month


TradeDate = Annotated[str, Depends(trade_date_param)]
Month = Annotated[MonthParams, Depends()]
