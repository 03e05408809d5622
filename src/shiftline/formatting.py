"""Human-readable time and duration formatting for axis and event labels."""

from __future__ import annotations

from datetime import datetime

from .config import HourFormat


def _twelve_hour(dt: datetime) -> tuple[int, str]:
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"  # noqa: PLR2004
    return hour, suffix


def format_time(dt: datetime, hour_format: HourFormat | str = HourFormat.TWENTY_FOUR_HOUR) -> str:
    """Format a time of day: "3:05 PM", "15:05" or "15h05"."""
    hour_format = HourFormat(hour_format)
    if hour_format == HourFormat.TWELVE_HOUR:
        hour, suffix = _twelve_hour(dt)
        return f"{hour}:{dt.minute:02d} {suffix}"
    if hour_format == HourFormat.FRENCH:
        return f"{dt.hour:02d}h{dt.minute:02d}"
    return f"{dt.hour:02d}:{dt.minute:02d}"


def format_hour(dt: datetime, hour_format: HourFormat | str = HourFormat.TWENTY_FOUR_HOUR) -> str:
    """Format an axis hour label: "3 PM", "15:00" or "15h00"."""
    hour_format = HourFormat(hour_format)
    if hour_format == HourFormat.TWELVE_HOUR:
        hour, suffix = _twelve_hour(dt)
        return f"{hour} {suffix}"
    if hour_format == HourFormat.FRENCH:
        return f"{dt.hour:02d}h00"
    return f"{dt.hour:02d}:00"


def format_duration(minutes: int) -> str:
    """Format minutes compactly: 45 -> "45min", 60 -> "1h", 90 -> "1h30"."""
    if minutes < 60:  # noqa: PLR2004
        return f"{minutes}min"
    hours, remainder = divmod(minutes, 60)
    if remainder == 0:
        return f"{hours}h"
    return f"{hours}h{remainder:02d}"
