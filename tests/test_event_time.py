"""Tests for the event end-time fallback."""

from __future__ import annotations

from datetime import datetime

import pytest

from surat_ai.core.interfaces import ValidationError
from surat_ai.filing.event_time import resolve_event_window


def test_missing_end_defaults_to_four_hours_later() -> None:
    assert resolve_event_window("2023-10-30T09:00", None) == (
        "2023-10-30T09:00",
        "2023-10-30T13:00",
    )


def test_default_end_rolls_over_midnight() -> None:
    assert resolve_event_window("2023-12-31T22:30", "") == (
        "2023-12-31T22:30",
        "2024-01-01T02:30",
    )


def test_aware_start_keeps_wall_clock_reading() -> None:
    _, end = resolve_event_window("2023-10-30T19:00:00+07:00", None)

    assert end == "2023-10-30T23:00"


def test_datetime_inputs_are_rendered_at_minute_precision() -> None:
    start, end = resolve_event_window(datetime(2024, 3, 1, 8, 15, 42), None)

    assert start == "2024-03-01T08:15"
    assert end == "2024-03-01T12:15"


def test_supplied_end_passes_through() -> None:
    assert resolve_event_window("2023-10-30T09:00", "2023-10-30T10:30") == (
        "2023-10-30T09:00",
        "2023-10-30T10:30",
    )


@pytest.mark.parametrize("start", [None, "", "   "])
def test_absent_start_drops_both(start: str | None) -> None:
    assert resolve_event_window(start, "2023-10-30T10:30") == (None, None)


@pytest.mark.parametrize("start", ["30 Oktober 2023", "besok pagi"])
def test_unparseable_start_is_a_validation_error(start: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        resolve_event_window(start, None)

    assert excinfo.value.missing == ("eventStart",)
