"""Canonical window and calendar-day helpers shared by the dashboards.

Day labels are derived in UTC so every dashboard labels the same date the
same way regardless of where it renders.
"""

from collections.abc import Sequence
from datetime import date, datetime, timezone
from typing import Protocol, TypeVar

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class _KeyedWindow(Protocol):
    @property
    def key(self) -> str: ...


_WindowT = TypeVar("_WindowT", bound=_KeyedWindow)


def parse_calendar_day(value: str) -> date | None:
    """Parse an ISO date or date-time into its UTC calendar day.

    Returns:
        The calendar day, or None when the value is not ISO formatted
    """
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def calendar_day_key(value: str) -> str:
    """Return a YYYY-MM-DD grouping key, or the trimmed raw value if unparseable."""
    day = parse_calendar_day(value)
    if day is None:
        return value.strip()
    return day.isoformat()


def derive_day_label(value: str, day_label: str | None = None) -> str:
    """Use the supplied label when present, else the short UTC weekday name."""
    if day_label and day_label.strip():
        return day_label.strip()
    day = parse_calendar_day(value)
    if day is None:
        return value
    return WEEKDAY_LABELS[day.weekday()]


def select_window(
    windows: Sequence[_WindowT],
    requested_key: str | None,
    default_key: str | None = None,
) -> _WindowT | None:
    """Pick the requested window, then the default window, then the first one."""
    for window in windows:
        if window.key == requested_key:
            return window
    if default_key:
        for window in windows:
            if window.key == default_key:
                return window
    return windows[0] if windows else None
