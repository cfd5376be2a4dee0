"""
Centralized Timezone Handling for Radar Runner

POLICY: Every scheduling decision is taken on the market clock (B3, Sao Paulo),
        regardless of the host's local timezone. Naive datetimes are treated
        as UTC at the boundary.

Usage:
    from utils.timezone import now_market, to_market_time

    now = now_market()             # aware, America/Sao_Paulo
    moment = to_market_time(dt)    # convert anything onto the market clock
"""

from datetime import datetime
from typing import Union

import pytz

from config import MARKET_TIMEZONE

# Timezone constants
TZ_UTC = pytz.UTC
TZ_MARKET = pytz.timezone(MARKET_TIMEZONE)


def now_market() -> datetime:
    """
    Get current time in the market timezone.

    Use this for window/holiday logic and output timestamps.

    Returns:
        Current time as market-aware datetime
    """
    return datetime.now(TZ_MARKET)


def to_market_time(ts: Union[datetime, str]) -> datetime:
    """
    Convert any timestamp to market time.

    Args:
        ts: datetime (aware or naive, assumes UTC if naive) or ISO string

    Returns:
        Market-aware datetime
    """
    if isinstance(ts, str):
        ts = datetime.fromisoformat(ts)

    # If naive, assume UTC
    if ts.tzinfo is None:
        ts = TZ_UTC.localize(ts)

    return ts.astimezone(TZ_MARKET)


def localize_market(naive: datetime) -> datetime:
    """
    Attach the market timezone to a naive wall-clock time.

    Unlike to_market_time, the wall-clock fields are kept as given.
    """
    if naive.tzinfo is not None:
        return naive.astimezone(TZ_MARKET)
    return TZ_MARKET.localize(naive)
