"""Event end-time fallback."""

from __future__ import annotations

from datetime import datetime, timedelta

from surat_ai.core.datetime_utils import format_minutes, parse_local_datetime
from surat_ai.core.interfaces import ValidationError

DEFAULT_EVENT_DURATION = timedelta(hours=4)


def resolve_event_window(
    start: str | datetime | None,
    end: str | datetime | None,
    *,
    duration: timedelta = DEFAULT_EVENT_DURATION,
) -> tuple[str | None, str | None]:
    """Return the concrete ``(start, end)`` pair for an event.

    Without a start both values are dropped. A supplied end is kept as is;
    a missing one becomes ``start + duration`` on the local wall clock.
    A start that is not an ISO date-time raises :class:`ValidationError`.
    """
    if start is None or (isinstance(start, str) and not start.strip()):
        return None, None

    parsed = _parse_start(start)
    start_text = start if isinstance(start, str) else format_minutes(start)
    if end is not None and not (isinstance(end, str) and not end.strip()):
        end_text = end if isinstance(end, str) else format_minutes(end)
        return start_text, end_text
    return start_text, format_minutes(parsed + duration)


def _parse_start(start: str | datetime) -> datetime:
    try:
        parsed = parse_local_datetime(start)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(
            ("eventStart",), f"Event start is not a valid date-time: {start!r}"
        )
    return parsed


__all__ = ["DEFAULT_EVENT_DURATION", "resolve_event_window"]
