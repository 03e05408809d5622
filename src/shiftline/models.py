"""Data models for Shiftline."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

DEFAULT_TRANSITION_MINUTES = 15


class EventStatus(str, Enum):
    """Lifecycle status of a scheduled event."""

    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    DELAYED = "delayed"
    EARLY = "early"
    BLOCKED = "blocked"
    COMPLETED = "completed"


# Statuses that carry an actual duration on status change
TIMED_STATUSES = frozenset({EventStatus.DELAYED, EventStatus.EARLY})


class AvailabilityStatus(str, Enum):
    """Availability of a row (resource) for scheduling."""

    AVAILABLE = "available"
    ABSENT = "absent"
    BREAK = "break"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class RowIndicator:
    """Fixed status dot shown next to a row."""

    color: str
    tooltip: str | None = None


@dataclass(frozen=True)
class RowAvailability:
    """Availability marker; anything but AVAILABLE disables interaction."""

    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    label: str | None = None  # e.g. "out of office / absence / break"


@dataclass(frozen=True)
class Row:
    """A horizontal lane of the timeline (one resource)."""

    id: str
    indicator: RowIndicator | None = None
    availability: RowAvailability | None = None

    @property
    def is_schedulable(self) -> bool:
        """True unless the row carries a non-available status."""
        return self.availability is None or (
            self.availability.status == AvailabilityStatus.AVAILABLE
        )


def _default_labels() -> dict[str, str]:
    return {}


@dataclass(frozen=True)
class Period:
    """A validity period (shift) mapping rows to display labels.

    transition_duration is the width in minutes of the handover window on
    each side of the boundary with the next period in sequence.
    """

    id: str
    start_time: datetime
    end_time: datetime
    row_labels: dict[str, str] = field(default_factory=_default_labels)
    transition_duration: int = DEFAULT_TRANSITION_MINUTES

    def label_for(self, row_id: str) -> str:
        """Label for a row during this period, "" when none is configured."""
        return self.row_labels.get(row_id, "")


@dataclass(frozen=True)
class Task:
    """A time-bounded event placed on a row.

    actual_end_time and actual_duration only drive display overflow; they
    never affect scheduling legality.
    """

    id: str
    row_id: str
    start_time: datetime
    end_time: datetime
    title: str = ""
    status: EventStatus = EventStatus.PLANNED
    actual_end_time: datetime | None = None
    actual_duration: int | None = None  # minutes
    color: str | None = None
    data: Any = None  # Opaque caller payload for renderers

    @property
    def duration(self) -> timedelta:
        """Planned duration as a timedelta."""
        return self.end_time - self.start_time

    @property
    def planned_minutes(self) -> int:
        """Planned duration in whole minutes."""
        return int(self.duration.total_seconds() // 60)

    @property
    def is_blocked(self) -> bool:
        """Blocked tasks can never be displaced by a cascade."""
        return self.status == EventStatus.BLOCKED

    @property
    def is_draggable(self) -> bool:
        """Whether the task itself may be picked up for a move."""
        return not self.is_blocked


@dataclass(frozen=True)
class EventMove:
    """A proposed new placement for one event."""

    event_id: str
    new_start_time: datetime
    new_end_time: datetime


@dataclass(frozen=True)
class StatusChange:
    """A status update request handed back to the caller's update path."""

    event_id: str
    new_status: EventStatus
    actual_duration: int | None = None  # minutes, delayed/early only

    @classmethod
    def create(
        cls, event_id: str, new_status: EventStatus | str, actual_duration: int | None = None
    ) -> StatusChange:
        """Build a change, keeping actual_duration only for delayed/early."""
        status = EventStatus(new_status)
        if status not in TIMED_STATUSES:
            actual_duration = None
        return cls(event_id=event_id, new_status=status, actual_duration=actual_duration)


def apply_moves(tasks: Iterable[Task], moves: Sequence[EventMove]) -> list[Task]:
    """Return a new task list with the moves applied.

    Tasks absent from the move list are returned unchanged.
    """
    by_id = {move.event_id: move for move in moves}
    result: list[Task] = []
    for task in tasks:
        move = by_id.get(task.id)
        if move is None:
            result.append(task)
        else:
            result.append(replace(task, start_time=move.new_start_time, end_time=move.new_end_time))
    return result


def apply_status_change(tasks: Iterable[Task], change: StatusChange) -> list[Task]:
    """Return a new task list with the status change applied to one task."""
    result: list[Task] = []
    for task in tasks:
        if task.id == change.event_id:
            task = replace(task, status=change.new_status, actual_duration=change.actual_duration)
        result.append(task)
    return result


def _default_rows() -> list[Row]:
    return []


def _default_periods() -> list[Period]:
    return []


def _default_tasks() -> list[Task]:
    return []


@dataclass
class Schedule:
    """Caller-side snapshot of rows, periods and events."""

    rows: list[Row] = field(default_factory=_default_rows)
    periods: list[Period] = field(default_factory=_default_periods)
    events: list[Task] = field(default_factory=_default_tasks)

    def get_row(self, row_id: str) -> Row | None:
        """Get a row by ID."""
        return next((row for row in self.rows if row.id == row_id), None)

    def get_event(self, event_id: str) -> Task | None:
        """Get an event by ID."""
        return next((event for event in self.events if event.id == event_id), None)

    def events_for_row(self, row_id: str) -> list[Task]:
        """All events placed on the given row, in list order."""
        return [event for event in self.events if event.row_id == row_id]

    def with_moves(self, moves: Sequence[EventMove]) -> Schedule:
        """Return a new schedule with the moves applied."""
        return Schedule(
            rows=list(self.rows),
            periods=list(self.periods),
            events=apply_moves(self.events, moves),
        )

    def with_status_change(self, change: StatusChange) -> Schedule:
        """Return a new schedule with a status change applied."""
        return Schedule(
            rows=list(self.rows),
            periods=list(self.periods),
            events=apply_status_change(self.events, change),
        )
