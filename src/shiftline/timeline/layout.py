"""Event layout rectangles and scroll geometry for the timeline grid."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Literal

from shiftline.formatting import format_duration
from shiftline.models import EventStatus, Row, Task

from .coords import minutes_between, snap_to_slot

if TYPE_CHECKING:
    from shiftline.config import TimelineConfig


@dataclass(frozen=True)
class EventLayout:
    """Horizontal placement of an event, as percentages of the grid width."""

    id: str
    left: float
    width: float
    overflow_width: float | None = None  # past end_time when running late


@dataclass(frozen=True)
class VisibleRange:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DurationInfo:
    """Duration text shown on an event block."""

    display: str
    modifier: str | None = None
    modifier_type: Literal["delayed", "early"] | None = None


def event_layout(task: Task, config: TimelineConfig) -> EventLayout:
    """Compute left/width (and overflow for late events) for one task."""
    total_minutes = config.total_minutes
    start_offset = minutes_between(config.start_date, task.start_time)

    overflow_width: float | None = None
    if task.actual_end_time is not None and task.actual_end_time > task.end_time:
        overflow = minutes_between(task.end_time, task.actual_end_time)
        overflow_width = overflow / total_minutes * 100

    return EventLayout(
        id=task.id,
        left=start_offset / total_minutes * 100,
        width=task.planned_minutes / total_minutes * 100,
        overflow_width=overflow_width,
    )


def layout_events(tasks: Iterable[Task], config: TimelineConfig) -> dict[str, EventLayout]:
    return {task.id: event_layout(task, config) for task in tasks}


def scroll_position_for_time(
    time: datetime, config: TimelineConfig, container_width: float, grid_width: float
) -> float:
    """Scroll offset that centres time in the container, never negative."""
    offset = minutes_between(config.start_date, time)
    time_position = offset / config.total_minutes * grid_width
    return max(0.0, time_position - container_width / 2)


def time_from_scroll_position(
    scroll_left: float, config: TimelineConfig, grid_width: float
) -> datetime:
    minutes_offset = scroll_left / grid_width * config.total_minutes
    return config.start_date + timedelta(minutes=minutes_offset)


def visible_range(
    scroll_left: float, container_width: float, config: TimelineConfig, grid_width: float
) -> VisibleRange:
    """Time range currently shown in a container of container_width pixels."""
    return VisibleRange(
        start=time_from_scroll_position(scroll_left, config, grid_width),
        end=time_from_scroll_position(scroll_left + container_width, config, grid_width),
    )


def is_collapsed(scroll_left: float, config: TimelineConfig) -> bool:
    """The row column collapses once the grid is scrolled past the threshold."""
    return scroll_left > config.scroll_collapse_threshold


def row_column_width(collapsed: bool, config: TimelineConfig) -> int:
    if collapsed:
        return config.row_column_width_collapsed
    return config.row_column_width_expanded


def slot_click_time(
    row: Row, click_x: float, grid_width: float, config: TimelineConfig
) -> datetime | None:
    """Time of the slot under a click, or None on an unavailable row."""
    if not row.is_schedulable:
        return None
    clicked = config.start_date + timedelta(minutes=click_x / grid_width * config.total_minutes)
    return snap_to_slot(clicked, config.start_date, config.slot_duration)


def duration_info(task: Task) -> DurationInfo:
    """Duration label for a task, with a delay or early-finish modifier.

    actual_duration takes precedence; a delayed task without one falls back
    to actual_end_time.
    """
    planned = task.planned_minutes

    if task.actual_duration is not None:
        diff = task.actual_duration - planned
        if task.status == EventStatus.DELAYED and diff > 0:
            return DurationInfo(
                display=format_duration(task.actual_duration),
                modifier=f"({diff} min. delayed)",
                modifier_type="delayed",
            )
        if task.status == EventStatus.EARLY and diff < 0:
            return DurationInfo(
                display=format_duration(task.actual_duration),
                modifier=f"({abs(diff)} min. early)",
                modifier_type="early",
            )

    if task.status == EventStatus.DELAYED and task.actual_end_time is not None:
        actual = minutes_between(task.start_time, task.actual_end_time)
        diff = actual - planned
        if diff > 0:
            return DurationInfo(
                display=format_duration(actual),
                modifier=f"({diff} min. delayed)",
                modifier_type="delayed",
            )

    return DurationInfo(display=format_duration(planned))


def initial_scroll_position(
    config: TimelineConfig, reference_time: datetime, container_width: float
) -> float:
    """Scroll offset to open the grid at.

    Centred on reference_time when auto_scroll_to_now is set, else the
    window start.
    """
    if not config.auto_scroll_to_now:
        return 0.0
    return scroll_position_for_time(reference_time, config, container_width, config.grid_width)


def scroll_edge(
    scroll_left: float, container_width: float, grid_width: float
) -> Literal["start", "end"] | None:
    """Which end of the grid the viewport touches, if any."""
    if scroll_left <= 0:
        return "start"
    if scroll_left + container_width >= grid_width:
        return "end"
    return None


def extend_window(config: TimelineConfig, edge: Literal["start", "end"]) -> TimelineConfig:
    """Grow the window by infinite_scroll.load_more_days at one edge.

    Returns config unchanged when infinite scroll is disabled.
    """
    if not config.infinite_scroll.enabled:
        return config
    extra = timedelta(days=config.infinite_scroll.load_more_days)
    if edge == "start":
        return config.model_copy(update={"start_date": config.start_date - extra})
    return config.model_copy(update={"end_date": config.end_date + extra})
