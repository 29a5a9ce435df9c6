"""Local wall-clock date helpers shared across the application.

Event times are handled as naive local date-times at minute precision, the
same ``YYYY-MM-DDTHH:MM`` shape a ``datetime-local`` form input produces.
"""

from __future__ import annotations

from datetime import date, datetime

__all__ = [
    "MINUTE_FORMAT",
    "current_year",
    "format_minutes",
    "parse_local_datetime",
    "today_iso",
    "truncate_to_minutes",
]

MINUTE_FORMAT = "%Y-%m-%dT%H:%M"


def parse_local_datetime(value: str | datetime | None) -> datetime | None:
    """Parse ``value`` into a naive local ``datetime``.

    Timezone-aware inputs keep their wall-clock reading; the offset is dropped
    rather than converted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1]
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    return parsed


def format_minutes(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM``."""
    return value.strftime(MINUTE_FORMAT)


def truncate_to_minutes(value: str | None) -> str | None:
    """Cut an ISO date-time string down to minute precision."""
    if not value:
        return None
    return value[:16]


def today_iso(today: date | None = None) -> str:
    """Return the local calendar date as ``YYYY-MM-DD``."""
    return (today or date.today()).isoformat()


def current_year(now: datetime | None = None) -> int:
    """Return the current local year."""
    return (now or datetime.now()).year
