"""Schedule loading and saving (YAML)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Period, Row, RowAvailability, RowIndicator, Schedule, Task
from .schemas import EventSchema, PeriodSchema, RowSchema, ScheduleSchema

logger = get_logger()


def _row_from_schema(schema: RowSchema) -> Row:
    indicator = None
    if schema.indicator is not None:
        indicator = RowIndicator(color=schema.indicator.color, tooltip=schema.indicator.tooltip)
    availability = None
    if schema.availability is not None:
        availability = RowAvailability(
            status=schema.availability.status, label=schema.availability.label
        )
    return Row(id=schema.id, indicator=indicator, availability=availability)


def _period_from_schema(schema: PeriodSchema) -> Period:
    return Period(
        id=schema.id,
        start_time=schema.start_time,
        end_time=schema.end_time,
        row_labels=dict(schema.row_labels),
        transition_duration=schema.transition_duration,
    )


def _task_from_schema(schema: EventSchema) -> Task:
    return Task(
        id=schema.id,
        row_id=schema.row_id,
        start_time=schema.start_time,
        end_time=schema.end_time,
        title=schema.title,
        status=schema.status,
        actual_end_time=schema.actual_end_time,
        actual_duration=schema.actual_duration,
        color=schema.color,
        data=schema.data,
    )


def find_overlaps(schedule: Schedule) -> list[tuple[str, str]]:
    """Pairs of event ids that overlap on the same row."""
    overlaps: list[tuple[str, str]] = []
    by_row: dict[str, list[Task]] = {}
    for event in schedule.events:
        by_row.setdefault(event.row_id, []).append(event)

    for events in by_row.values():
        ordered = sorted(events, key=lambda e: e.start_time)
        for earlier, later in zip(ordered, ordered[1:]):
            if later.start_time < earlier.end_time:
                overlaps.append((earlier.id, later.id))
    return overlaps


def parse_schedule(data: dict[str, Any]) -> Schedule:
    """Build a Schedule from already-loaded YAML data."""
    try:
        schema = ScheduleSchema(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid schedule structure: {e}") from e

    schedule = Schedule(
        rows=[_row_from_schema(r) for r in schema.rows],
        periods=[_period_from_schema(p) for p in schema.periods],
        events=[_task_from_schema(e) for e in schema.events],
    )

    for first, second in find_overlaps(schedule):
        logger.warning(f"Warning: events {first} and {second} overlap on the same row")

    logger.debug(
        f"Loaded {len(schedule.rows)} rows, {len(schedule.periods)} periods, "
        f"{len(schedule.events)} events"
    )
    return schedule


def load_schedule(path: Path | str) -> Schedule:
    """Load a schedule YAML file.

    Raises:
        ParseError: If the file is missing or is not valid YAML
        ValidationError: If the data does not match the schedule schema
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    return parse_schedule(data)  # type: ignore[arg-type]


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    """Serialize a schedule to plain YAML-friendly data."""
    rows: list[dict[str, Any]] = []
    for row in schedule.rows:
        entry: dict[str, Any] = {"id": row.id}
        if row.indicator is not None:
            entry["indicator"] = _drop_none(
                {"color": row.indicator.color, "tooltip": row.indicator.tooltip}
            )
        if row.availability is not None:
            entry["availability"] = _drop_none(
                {"status": row.availability.status.value, "label": row.availability.label}
            )
        rows.append(entry)

    periods = [
        {
            "id": p.id,
            "start_time": p.start_time.isoformat(),
            "end_time": p.end_time.isoformat(),
            "transition_duration": p.transition_duration,
            "row_labels": dict(p.row_labels),
        }
        for p in schedule.periods
    ]

    events = [
        _drop_none(
            {
                "id": e.id,
                "row_id": e.row_id,
                "start_time": e.start_time.isoformat(),
                "end_time": e.end_time.isoformat(),
                "title": e.title or None,
                "status": e.status.value,
                "actual_end_time": e.actual_end_time.isoformat() if e.actual_end_time else None,
                "actual_duration": e.actual_duration,
                "color": e.color,
                "data": e.data,
            }
        )
        for e in schedule.events
    ]

    return {"rows": rows, "periods": periods, "events": events}


def dump_schedule(schedule: Schedule, path: Path | str) -> None:
    """Write a schedule back to a YAML file."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(schedule_to_dict(schedule), f, default_flow_style=False, sort_keys=False)
