"""Cascade rescheduling of tasks within a single row.

Moving a task to a new start time may overlap the tasks after it. Those
tasks are pushed forward, in start order, just far enough to clear the
previous placement. The sweep never backtracks, never pulls a task earlier
and never touches another row. A blocked task that would have to move
rejects the whole operation.

Outcomes are returned, never raised: illegal drops are a normal result of
dragging and callers usually just snap the dragged element back.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from shiftline.logger import checks_enabled, get_logger
from shiftline.models import EventMove, Row, Task

from .coords import slot_index_to_time

if TYPE_CHECKING:
    from shiftline.config import TimelineConfig

logger = get_logger()


@dataclass(frozen=True)
class Accepted:
    """The move is legal.

    moves holds the moved task first, then every pushed task in push order.
    Tasks missing from moves keep their placement.
    """

    moves: tuple[EventMove, ...]

    @property
    def accepted(self) -> bool:
        return True

    def move_for(self, task_id: str) -> EventMove | None:
        return next((m for m in self.moves if m.event_id == task_id), None)


@dataclass(frozen=True)
class RejectedOverlap:
    """The drop point is illegal given the row's current occupancy."""

    reason: str

    @property
    def accepted(self) -> bool:
        return False

    @property
    def moves(self) -> tuple[EventMove, ...]:
        return ()


@dataclass(frozen=True)
class RejectedBlocked:
    """Resolving the cascade would displace an immovable (blocked) task."""

    task_id: str

    @property
    def accepted(self) -> bool:
        return False

    @property
    def moves(self) -> tuple[EventMove, ...]:
        return ()


CascadeOutcome = Accepted | RejectedOverlap | RejectedBlocked


def _contains_drop_point(task: Task, time: datetime) -> bool:
    """True if time lies strictly inside the task's span."""
    return task.start_time < time < task.end_time


def resolve_cascade(
    moved_task_id: str, new_start_time: datetime, row_tasks: Sequence[Task]
) -> CascadeOutcome:
    """Decide whether a task may move to new_start_time and what it displaces.

    Only the drop point is validated against the other tasks' spans. Tasks
    starting at or after it are pushed clear of the new interval; a task
    starting before it is never pushed, so reaching past the drop point
    rejects the move.

    Args:
        moved_task_id: ID of the task being dragged
        new_start_time: Proposed start time for it
        row_tasks: Snapshot of every task on the row (not mutated)

    Returns:
        Accepted with the ordered move list, RejectedOverlap when the task is
        unknown or the drop point lands inside another task, RejectedBlocked
        when a blocked task would need to be pushed.
    """
    moved = next((t for t in row_tasks if t.id == moved_task_id), None)
    if moved is None:
        logger.moves(f"Rejected move of {moved_task_id}: task not found in row")
        return RejectedOverlap(reason=f"task {moved_task_id!r} not found in row")

    others = [t for t in row_tasks if t.id != moved_task_id]

    for other in others:
        if _contains_drop_point(other, new_start_time):
            logger.moves(
                f"Rejected move of {moved_task_id} to {new_start_time.isoformat()}: "
                f"drop point inside {other.id}"
            )
            return RejectedOverlap(
                reason=f"drop point {new_start_time.isoformat()} is inside task {other.id!r}"
            )

    new_end_time = new_start_time + moved.duration
    moves = [EventMove(moved.id, new_start_time, new_end_time)]

    affected = sorted(
        (t for t in others if t.start_time >= new_start_time), key=lambda t: t.start_time
    )

    verbose = checks_enabled()
    cursor = new_end_time
    for task in affected:
        if task.start_time >= cursor:
            # Already clear of the push chain; resync to the next real gap
            if verbose:
                logger.checks(
                    f"  {task.id} at {task.start_time.isoformat()} clears cursor "
                    f"{cursor.isoformat()}, left in place"
                )
            cursor = task.end_time
            continue

        if task.is_blocked:
            logger.moves(
                f"Rejected move of {moved_task_id} to {new_start_time.isoformat()}: "
                f"blocked task {task.id} would be displaced"
            )
            return RejectedBlocked(task_id=task.id)

        pushed_end = cursor + task.duration
        if verbose:
            logger.checks(
                f"  {task.id} overlaps cursor {cursor.isoformat()}, "
                f"pushed to [{cursor.isoformat()}, {pushed_end.isoformat()})"
            )
        moves.append(EventMove(task.id, cursor, pushed_end))
        cursor = pushed_end

    logger.moves(
        f"Accepted move of {moved_task_id} to {new_start_time.isoformat()} "
        f"({len(moves) - 1} task(s) pushed)"
    )
    return Accepted(moves=tuple(moves))


def valid_drop_zones(
    moved_task_id: str, row_tasks: Sequence[Task], config: TimelineConfig
) -> list[datetime]:
    """Every slot boundary where dropping the task would be accepted."""
    zones: list[datetime] = []
    for index in range(config.slot_count):
        slot_time = slot_index_to_time(index, config.start_date, config.slot_duration)
        if resolve_cascade(moved_task_id, slot_time, row_tasks).accepted:
            zones.append(slot_time)
    logger.debug(f"{len(zones)} of {config.slot_count} slots accept {moved_task_id}")
    return zones


class CascadeScheduler:
    """Cascade front-end bound to one row snapshot.

    Filters the given tasks to the row and refuses every move on a row that
    is not schedulable. Blocked tasks cannot be picked up either.
    """

    def __init__(self, row: Row, tasks: Sequence[Task]):
        self.row = row
        self.tasks = [t for t in tasks if t.row_id == row.id]

    def _precheck(self, task_id: str) -> RejectedOverlap | None:
        if not self.row.is_schedulable:
            return RejectedOverlap(reason=f"row {self.row.id!r} is unavailable")
        task = next((t for t in self.tasks if t.id == task_id), None)
        if task is not None and not task.is_draggable:
            return RejectedOverlap(reason=f"task {task_id!r} is blocked and cannot be moved")
        return None

    def move(self, task_id: str, new_start_time: datetime) -> CascadeOutcome:
        """Resolve a drop of task_id at new_start_time."""
        rejection = self._precheck(task_id)
        if rejection is not None:
            logger.moves(f"Rejected move of {task_id}: {rejection.reason}")
            return rejection
        return resolve_cascade(task_id, new_start_time, self.tasks)

    def drop_zones(self, task_id: str, config: TimelineConfig) -> list[datetime]:
        """Legal drop times for task_id, empty when the row or task is locked."""
        if self._precheck(task_id) is not None:
            return []
        return valid_drop_zones(task_id, self.tasks, config)
