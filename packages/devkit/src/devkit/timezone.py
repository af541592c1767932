from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Los_Angeles"

_dashboard_zone = ZoneInfo(DEFAULT_TIMEZONE)


def configure_dashboard_timezone(name: str) -> None:
    """Set the zone used for dashboard clocks; the process TZ is left untouched."""
    global _dashboard_zone
    _dashboard_zone = ZoneInfo(name)


def dashboard_zone() -> ZoneInfo:
    return _dashboard_zone


def now_local() -> datetime:
    return datetime.now(_dashboard_zone)


def now_local_iso() -> str:
    return now_local().isoformat()


def current_hour() -> int:
    return now_local().hour
