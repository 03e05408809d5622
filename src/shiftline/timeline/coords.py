"""Time-coordinate mapping: absolute time, percentage/pixel offsets and slots.

All functions are pure. Minute differences are whole minutes truncated
toward zero. A non-positive window is a caller configuration error and is
not guarded here.
"""

from __future__ import annotations

from datetime import datetime, timedelta

MINUTES_PER_HOUR = 60
MARKER_CYCLE = 8  # T0..T7


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def position_percentage(time: datetime, start: datetime, end: datetime) -> float:
    """Position of time within [start, end] as a percentage.

    Unbounded: times outside the window give values below 0 or above 100.
    """
    return minutes_between(start, time) / minutes_between(start, end) * 100


def width_percentage(
    start_time: datetime, end_time: datetime, window_start: datetime, window_end: datetime
) -> float:
    """Width of [start_time, end_time] as a percentage of the window."""
    return minutes_between(start_time, end_time) / minutes_between(window_start, window_end) * 100


def to_pixel(time: datetime, start: datetime, total_minutes: int, grid_width: float) -> float:
    """Pixel offset of time on a grid of grid_width pixels."""
    return minutes_between(start, time) / total_minutes * grid_width


def from_pixel(
    pixel_offset: float, start: datetime, total_minutes: int, grid_width: float
) -> datetime:
    """Inverse of to_pixel."""
    return start + timedelta(minutes=pixel_offset / grid_width * total_minutes)


def time_to_slot_index(time: datetime, start: datetime, slot_duration: int) -> int:
    """Index of the slot containing time (floor)."""
    return minutes_between(start, time) // slot_duration


def slot_index_to_time(slot_index: int, start: datetime, slot_duration: int) -> datetime:
    return start + timedelta(minutes=slot_index * slot_duration)


def snap_to_slot(time: datetime, start: datetime, slot_duration: int) -> datetime:
    """Snap time to the slot boundary at or before it (never rounds up)."""
    return slot_index_to_time(time_to_slot_index(time, start, slot_duration), start, slot_duration)


def start_of_hour(time: datetime) -> datetime:
    return time.replace(minute=0, second=0, microsecond=0)


def hour_markers(start: datetime, end: datetime) -> list[datetime]:
    """Hour boundaries from the first one at or after start up to end inclusive.

    A fresh list is built on every call.
    """
    markers: list[datetime] = []
    current = start_of_hour(start)
    if current < start:
        current += timedelta(hours=1)

    while current <= end:
        markers.append(current)
        current += timedelta(hours=1)

    return markers


def period_marker(hour: datetime, reference_time: datetime, prefix: str) -> str:
    """Cyclic marker ("T0".."T7") for an hour relative to a reference time.

    Hours before the reference wrap around so the cycle stays continuous.
    """
    hours_diff = minutes_between(reference_time, hour) // MINUTES_PER_HOUR
    return f"{prefix}{hours_diff % MARKER_CYCLE}"


def current_time_slot(now: datetime, slot_duration: int) -> datetime:
    """Floor now to its slot within the hour, dropping seconds."""
    rounded = (now.minute // slot_duration) * slot_duration
    return now.replace(minute=rounded, second=0, microsecond=0)
