"""Pydantic schemas for schedule YAML data validation."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import DEFAULT_TRANSITION_MINUTES, AvailabilityStatus, EventStatus


class RowIndicatorSchema(BaseModel):
    """Schema for a row's status dot."""

    color: str
    tooltip: str | None = None


class RowAvailabilitySchema(BaseModel):
    """Schema for a row's availability."""

    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    label: str | None = None


class RowSchema(BaseModel):
    """Schema for a timeline row."""

    id: str
    indicator: RowIndicatorSchema | None = None
    availability: RowAvailabilitySchema | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)


class PeriodSchema(BaseModel):
    """Schema for a labelling period (shift)."""

    id: str
    start_time: datetime
    end_time: datetime
    row_labels: dict[str, str] = Field(default_factory=dict)
    transition_duration: int = DEFAULT_TRANSITION_MINUTES

    @field_validator("row_labels", mode="before")
    @classmethod
    def coerce_labels(cls, v: Any) -> dict[str, str]:
        """Row ids and labels are always strings, even when YAML reads numbers."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): str(val) for k, val in v.items()}  # type: ignore[misc]
        raise ValueError("row_labels must be a mapping of row id to label")

    @model_validator(mode="after")
    def check_times(self) -> PeriodSchema:
        if self.end_time < self.start_time:
            raise ValueError(f"Period {self.id}: end_time is before start_time")
        if self.transition_duration < 0:
            raise ValueError(f"Period {self.id}: transition_duration must not be negative")
        return self


class EventSchema(BaseModel):
    """Schema for a scheduled event."""

    id: str
    row_id: str
    start_time: datetime
    end_time: datetime
    title: str = ""
    status: EventStatus = EventStatus.PLANNED
    actual_end_time: datetime | None = None
    actual_duration: int | None = None
    color: str | None = None
    data: Any = None

    @field_validator("id", "row_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @model_validator(mode="after")
    def check_times(self) -> EventSchema:
        if self.end_time <= self.start_time:
            raise ValueError(f"Event {self.id}: end_time must be after start_time")
        return self


class ScheduleSchema(BaseModel):
    """Schema for an entire schedule file."""

    rows: list[RowSchema] = Field(default_factory=list)
    periods: list[PeriodSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_ids(self) -> ScheduleSchema:
        """Ids must be unique and every event must sit on a known row."""
        for kind, ids in (
            ("row", [r.id for r in self.rows]),
            ("period", [p.id for p in self.periods]),
            ("event", [e.id for e in self.events]),
        ):
            seen: set[str] = set()
            for item_id in ids:
                if item_id in seen:
                    raise ValueError(f"Duplicate {kind} id: {item_id}")
                seen.add(item_id)

        row_ids = {r.id for r in self.rows}
        for event in self.events:
            if row_ids and event.row_id not in row_ids:
                raise ValueError(f"Event {event.id} references unknown row {event.row_id}")
        return self
