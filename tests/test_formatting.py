"""Tests for time and duration formatting."""

from datetime import datetime

import pytest

from shiftline.config import HourFormat
from shiftline.formatting import format_duration, format_hour, format_time


@pytest.mark.parametrize(
    ("hour_format", "expected"),
    [
        (HourFormat.TWELVE_HOUR, "3:05 PM"),
        (HourFormat.TWENTY_FOUR_HOUR, "15:05"),
        ("french", "15h05"),
    ],
)
def test_format_time(hour_format: HourFormat | str, expected: str) -> None:
    assert format_time(datetime(2025, 1, 6, 15, 5), hour_format) == expected


@pytest.mark.parametrize(
    ("hour_format", "expected"),
    [
        (HourFormat.TWELVE_HOUR, "3 PM"),
        (HourFormat.TWENTY_FOUR_HOUR, "15:00"),
        ("french", "15h00"),
    ],
)
def test_format_hour(hour_format: HourFormat | str, expected: str) -> None:
    assert format_hour(datetime(2025, 1, 6, 15, 0), hour_format) == expected


def test_twelve_hour_midnight_and_noon() -> None:
    assert format_time(datetime(2025, 1, 6, 0, 30), "12h") == "12:30 AM"
    assert format_hour(datetime(2025, 1, 6, 12, 0), "12h") == "12 PM"


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, "0min"), (45, "45min"), (60, "1h"), (90, "1h30"), (125, "2h05")],
)
def test_format_duration(minutes: int, expected: str) -> None:
    assert format_duration(minutes) == expected
