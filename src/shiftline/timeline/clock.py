"""Injected time sources and the "now" marker.

The core never samples the wall clock itself. Callers pass a reference time,
usually taken from a Clock they refresh on their own timer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Protocol

from .coords import position_percentage

if TYPE_CHECKING:
    from shiftline.config import TimelineConfig


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time."""
        ...


class SystemClock:
    """Wall-clock time, naive local by default or aware in the given zone."""

    def __init__(self, tz: tzinfo | None = None):
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """A clock frozen at a given instant, advanced explicitly."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = instant


@dataclass(frozen=True)
class NowIndicator:
    """Placement of the "now" line on the grid."""

    current_time: datetime
    visible: bool
    position_percent: float


def now_indicator(config: TimelineConfig, reference_time: datetime) -> NowIndicator:
    """Place the now marker for reference_time; hidden outside the window."""
    visible = config.start_date <= reference_time <= config.end_date
    position = (
        position_percentage(reference_time, config.start_date, config.end_date) if visible else 0.0
    )
    return NowIndicator(current_time=reference_time, visible=visible, position_percent=position)
