from __future__ import annotations

import time
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def monotonic_ms() -> int:
    """Milliseconds from a monotonic clock, used by the onboarding timers."""
    return int(time.monotonic() * 1000)


def format_short_date(value: date) -> str:
    """'Aug 15, 2025' style used by the leave list."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_hms(seconds: int) -> str:
    hours, rest = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
