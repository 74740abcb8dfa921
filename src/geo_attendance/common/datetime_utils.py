from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def minutes_from_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def parse_hhmm(value: str) -> int:
    """Parse an ``HH:mm`` string into minutes from midnight."""
    parts = (value or "").strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time string: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time string: {value!r}")
    return hours * 60 + minutes


def format_hhmm(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"
