"""Pytest configuration and fixtures for shiftline tests."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from shiftline.config import TimelineConfig
from shiftline.logger import reset_logger
from shiftline.models import EventStatus, Period, Row, Task

DAY = datetime(2025, 1, 6)


def at(hour: int, minute: int = 0) -> datetime:
    """A time on the test day."""
    return DAY + timedelta(hours=hour, minutes=minute)


def task(
    task_id: str,
    start: datetime,
    end: datetime,
    status: EventStatus = EventStatus.PLANNED,
    row_id: str = "row-1",
) -> Task:
    """Create a Task with sensible defaults for tests."""
    return Task(id=task_id, row_id=row_id, start_time=start, end_time=end, status=status)


def assert_no_overlaps(tasks: list[Task]) -> None:
    """Assert that no two tasks on the same row overlap."""
    by_row: dict[str, list[Task]] = {}
    for t in tasks:
        by_row.setdefault(t.row_id, []).append(t)
    for row_id, row_tasks in by_row.items():
        ordered = sorted(row_tasks, key=lambda t: t.start_time)
        for earlier, later in zip(ordered, ordered[1:]):
            assert later.start_time >= earlier.end_time, (
                f"Row {row_id}: {earlier.id} ends {earlier.end_time}, "
                f"{later.id} starts {later.start_time}"
            )


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


@pytest.fixture
def day_config() -> TimelineConfig:
    """A 08:00-18:00 window with 15 minute slots."""
    return TimelineConfig(start_date=at(8), end_date=at(18), slot_duration=15)


@pytest.fixture
def abc_row() -> list[Task]:
    """Three back-to-back one hour tasks: A 10-11, B 11-12, C 12-13."""
    return [
        task("A", at(10), at(11)),
        task("B", at(11), at(12)),
        task("C", at(12), at(13)),
    ]


@pytest.fixture
def shifts() -> list[Period]:
    """Morning 00:00-08:00 and afternoon 08:00-16:00 shifts."""
    return [
        Period(
            id="morning",
            start_time=at(0),
            end_time=at(8),
            row_labels={"row-1": "William Miller", "row-2": "Myriam Green"},
            transition_duration=15,
        ),
        Period(
            id="afternoon",
            start_time=at(8),
            end_time=at(16),
            row_labels={"row-1": "Sophie Adams", "row-2": "Emmi"},
            transition_duration=15,
        ),
    ]


@pytest.fixture
def rows() -> list[Row]:
    return [Row(id="row-1"), Row(id="row-2")]
