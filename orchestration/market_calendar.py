"""
Market Calendar - business-day, window and run-now decisions.

Single source of truth for "may the collector run at this moment?".
All functions are pure: same inputs, same answer, no cached state.

Usage:
    from orchestration.market_calendar import ExecutionContext, should_run

    ctx = ExecutionContext.from_moment(now_market())
    if should_run(False, ctx.date, ctx.hour, cfg.holidays, cfg.window_start, cfg.window_end):
        ...
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import AbstractSet

from utils.timezone import to_market_time

WEEKDAYS = range(1, 6)  # ISO: 1=Monday .. 5=Friday


@dataclass(frozen=True)
class ExecutionContext:
    """
    The current moment on the market clock, decomposed for decisions.

    Built fresh for every evaluation; never reused across sleeps.
    """
    moment: datetime
    date: date
    hour: int

    @classmethod
    def from_moment(cls, moment: datetime) -> "ExecutionContext":
        """Build a context from any datetime (converted to market time)."""
        moment = to_market_time(moment)
        return cls(moment=moment, date=moment.date(), hour=moment.hour)

    @property
    def date_str(self) -> str:
        return self.date.isoformat()


def is_business_day(day: date, holidays: AbstractSet[str]) -> bool:
    """
    True for Monday-Friday dates that are not holidays.

    Args:
        day: Calendar date to check
        holidays: Holiday dates as YYYY-MM-DD strings
    """
    return day.isoweekday() in WEEKDAYS and day.isoformat() not in holidays


def in_window(hour: int, start: int, end: int) -> bool:
    """
    True if start <= hour <= end.

    Both bounds are inclusive: a 10..20 window still runs at 20:59.
    start > end yields an empty window.
    """
    return start <= hour <= end


def should_run(
    force: bool,
    day: date,
    hour: int,
    holidays: AbstractSet[str],
    start: int,
    end: int,
) -> bool:
    """Run-now decision: forced, or a business day inside the window."""
    return force or (is_business_day(day, holidays) and in_window(hour, start, end))
