"""Pluggable text rendering for schedule boards.

Callers customise output by registering strategy objects on a
RendererRegistry instead of passing render callbacks through the core.
The core only supplies the data a strategy consumes: layout, duration
text and resolved row labels.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Protocol, TypeVar

from .config import TimelineConfig
from .formatting import format_hour, format_time
from .models import EventStatus, Row, Schedule, Task
from .timeline.clock import now_indicator
from .timeline.coords import hour_markers, period_marker
from .timeline.layout import DurationInfo, EventLayout, duration_info, event_layout
from .timeline.periods import (
    RowLabel,
    TransitioningLabel,
    TransitionZone,
    format_row_label,
    resolve_row_labels,
    transition_zones,
)

# Priority for built-in renderers (user registrations default to 10)
BUILTIN_PRIORITY = 5
UNAVAILABLE_DASH = "—"


class EventRenderer(Protocol):
    """Strategy producing the text for one event."""

    def render_event(
        self, task: Task, layout: EventLayout, duration: DurationInfo, default: str
    ) -> str:
        """Return the rendered event; default is the built-in rendering."""
        ...


class RowLabelRenderer(Protocol):
    """Strategy producing the header text for one row."""

    def render_row_label(self, row: Row, label: RowLabel, collapsed: bool, default: str) -> str:
        """Return the rendered label; default is the built-in rendering."""
        ...


class DefaultEventRenderer:
    """Time span, title, duration and status."""

    def __init__(self, config: TimelineConfig):
        self.config = config

    def render_event(
        self, task: Task, layout: EventLayout, duration: DurationInfo, default: str
    ) -> str:
        span = (
            f"{format_time(task.start_time, self.config.hour_format)}-"
            f"{format_time(task.end_time, self.config.hour_format)}"
        )
        text = f"[{span}] {task.title or task.id}  {duration.display}"
        if duration.modifier:
            text += f" {duration.modifier}"
        if task.status != EventStatus.PLANNED:
            text += f"  <{task.status.value}>"
        return text


class DefaultRowLabelRenderer:
    """Display label, with the incoming label during a handover."""

    def render_row_label(self, row: Row, label: RowLabel, collapsed: bool, default: str) -> str:
        if isinstance(label, TransitioningLabel):
            return f"{label.display} -> {label.display_incoming} ({label.progress:.0%})"
        return label.display


_R = TypeVar("_R")


@dataclass(frozen=True)
class RendererRegistration(Generic[_R]):
    """Registration entry for a rendering strategy."""

    priority: int
    keys: frozenset[str] | None  # statuses or row ids; None matches everything
    renderer: _R


class RendererRegistry:
    """Caller-owned set of rendering strategies.

    The matching registration with the highest priority wins; among equal
    priorities the most recently registered one wins.
    """

    def __init__(self, config: TimelineConfig):
        self._event_renderers: list[RendererRegistration[EventRenderer]] = [
            RendererRegistration(BUILTIN_PRIORITY, None, DefaultEventRenderer(config))
        ]
        self._label_renderers: list[RendererRegistration[RowLabelRenderer]] = [
            RendererRegistration(BUILTIN_PRIORITY, None, DefaultRowLabelRenderer())
        ]

    def register_event_renderer(
        self,
        renderer: EventRenderer,
        *,
        priority: int = 10,
        statuses: Sequence[EventStatus | str] | None = None,
    ) -> None:
        """Register an event renderer, optionally only for some statuses."""
        keys = frozenset(EventStatus(s).value for s in statuses) if statuses else None
        self._event_renderers.append(RendererRegistration(priority, keys, renderer))

    def register_row_label_renderer(
        self,
        renderer: RowLabelRenderer,
        *,
        priority: int = 10,
        row_ids: Sequence[str] | None = None,
    ) -> None:
        """Register a row label renderer, optionally only for some rows."""
        keys = frozenset(row_ids) if row_ids else None
        self._label_renderers.append(RendererRegistration(priority, keys, renderer))

    @staticmethod
    def _select(registrations: Sequence[RendererRegistration[_R]], key: str) -> _R:
        best = registrations[0]
        for registration in registrations[1:]:
            if registration.keys is not None and key not in registration.keys:
                continue
            if registration.priority >= best.priority:
                best = registration
        return best.renderer

    def event_renderer_for(self, task: Task) -> EventRenderer:
        return self._select(self._event_renderers, task.status.value)

    def row_label_renderer_for(self, row: Row) -> RowLabelRenderer:
        return self._select(self._label_renderers, row.id)

    def render_event(self, task: Task, config: TimelineConfig) -> str:
        layout = event_layout(task, config)
        duration = duration_info(task)
        default = self._event_renderers[0].renderer.render_event(task, layout, duration, "")
        return self.event_renderer_for(task).render_event(task, layout, duration, default)

    def render_row_label(self, row: Row, label: RowLabel, collapsed: bool) -> str:
        default = self._label_renderers[0].renderer.render_row_label(row, label, collapsed, "")
        return self.row_label_renderer_for(row).render_row_label(row, label, collapsed, default)


def _hour_header(config: TimelineConfig) -> str:
    """Axis line: each hour, with its cyclic marker when period markers are on."""
    markers = config.period_markers
    cells: list[str] = []
    for hour in hour_markers(config.start_date, config.end_date):
        cell = format_hour(hour, config.hour_format)
        if markers.enabled:
            cell += f" {period_marker(hour, config.marker_reference, markers.prefix)}"
        cells.append(cell)
    return "Hours  " + "  ".join(cells)


def _zone_line(
    zone: TransitionZone, rows: Sequence[Row], config: TimelineConfig, collapsed: bool
) -> str:
    span = (
        f"{format_time(zone.start_time, config.hour_format)}-"
        f"{format_time(zone.end_time, config.hour_format)}"
    )
    incoming = [
        f"{row.id} {format_row_label(zone.incoming_labels[row.id], collapsed)}"
        for row in rows
        if zone.incoming_labels.get(row.id)
    ]
    line = f"Shift handover {span} {zone.outgoing_id} -> {zone.incoming_id}"
    if incoming:
        line += ": " + ", ".join(incoming)
    return line


def render_board(
    schedule: Schedule,
    config: TimelineConfig,
    reference_time: datetime,
    registry: RendererRegistry | None = None,
    *,
    collapsed: bool = False,
) -> str:
    """Render rows, their labels and placed events as plain text."""
    if registry is None:
        registry = RendererRegistry(config)

    hour_format = config.hour_format
    lines = [
        f"Window {config.start_date:%Y-%m-%d} {format_time(config.start_date, hour_format)}"
        f" - {config.end_date:%Y-%m-%d} {format_time(config.end_date, hour_format)}"
        f" (slot {config.slot_duration}min)",
        _hour_header(config),
    ]
    lines.extend(
        _zone_line(zone, schedule.rows, config, collapsed)
        for zone in transition_zones(schedule.periods, config)
    )

    if config.show_now_indicator:
        indicator = now_indicator(config, reference_time)
        if indicator.visible:
            lines.append(
                f"Now {format_time(reference_time, hour_format)}"
                f" ({indicator.position_percent:.1f}%)"
            )

    period_labels = resolve_row_labels(
        schedule.rows, schedule.periods, reference_time, collapsed=collapsed
    )
    if period_labels.in_transition:
        lines.append(f"Handover in progress ({period_labels.transition_progress:.0%})")

    for row in schedule.rows:
        label = period_labels.for_row(row.id)
        header = registry.render_row_label(row, label, collapsed) if label else ""
        lines.append(f"{row.id}  {header}".rstrip())

        if not row.is_schedulable:
            reason = row.availability.label if row.availability else None
            lines.append(f"  {UNAVAILABLE_DASH} {reason or 'Unavailable'}")
            continue

        for task in sorted(schedule.events_for_row(row.id), key=lambda t: t.start_time):
            lines.append(f"  {registry.render_event(task, config)}")

    return "\n".join(lines) + "\n"
