from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

# Farm-local timezone used to decide what "today" is for age projections
DEFAULT_TIMEZONE_NAME = "UTC"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def set_default_timezone(name: str) -> None:
    global DEFAULT_TZ
    DEFAULT_TZ = ZoneInfo(name)


def farm_today() -> date:
    """Return the current calendar date in the farm timezone."""
    return datetime.now(DEFAULT_TZ).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
