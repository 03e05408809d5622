"""Period-transition resolution for row header labels.

Each query time is either Steady (a single active period) or Transitioning
between an adjacent pair of periods. The handover window around the
boundary between periods[i] and periods[i+1] is

    [periods[i].end_time - d, periods[i+1].start_time + d]

where d is periods[i].transition_duration. Both ends are inclusive.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from shiftline.logger import debug_enabled, get_logger
from shiftline.models import Period, Row

from .coords import minutes_between, position_percentage

if TYPE_CHECKING:
    from shiftline.config import TimelineConfig

logger = get_logger()


@dataclass(frozen=True)
class Transition:
    """An active handover between two adjacent periods."""

    outgoing: Period
    incoming: Period
    progress: float  # 0..1 through the handover window


@dataclass(frozen=True)
class SteadyLabel:
    """Label for a row while a single period is active."""

    row_id: str
    label: str
    display: str


@dataclass(frozen=True)
class TransitioningLabel:
    """Outgoing and incoming labels for a row during a handover."""

    row_id: str
    outgoing_label: str
    incoming_label: str
    progress: float
    display: str
    display_incoming: str

    @property
    def label(self) -> str:
        """The current (outgoing) label."""
        return self.outgoing_label


RowLabel = SteadyLabel | TransitioningLabel


@dataclass(frozen=True)
class PeriodLabels:
    """Labels for every row at one reference time."""

    labels: list[RowLabel]
    in_transition: bool
    transition_progress: float

    def for_row(self, row_id: str) -> RowLabel | None:
        return next((label for label in self.labels if label.row_id == row_id), None)


@dataclass(frozen=True)
class TransitionZone:
    """A handover zone drawn on the grid after a period boundary."""

    outgoing_id: str
    incoming_id: str
    start_time: datetime  # clipped to the window
    end_time: datetime
    left_percent: float
    width_percent: float
    incoming_labels: dict[str, str]


def _within(time: datetime, start: datetime, end: datetime) -> bool:
    return start <= time <= end


def active_period(time: datetime, periods: Sequence[Period]) -> Period | None:
    """First period whose [start_time, end_time] contains time (both ends inclusive)."""
    return next((p for p in periods if _within(time, p.start_time, p.end_time)), None)


def transition_window(time: datetime, periods: Sequence[Period]) -> Transition | None:
    """Find the handover window containing time, if any.

    Adjacent pairs are checked in order and the first match wins when
    configured windows overlap.
    """
    for current, following in zip(periods, periods[1:]):
        width = timedelta(minutes=current.transition_duration)
        transition_start = current.end_time - width
        transition_end = following.start_time + width

        if not _within(time, transition_start, transition_end):
            continue

        total = minutes_between(transition_start, transition_end)
        if total <= 0:
            # Zero-width window: the handover is instantaneous
            progress = 1.0
        else:
            progress = minutes_between(transition_start, time) / total
        progress = min(1.0, max(0.0, progress))

        if debug_enabled():
            logger.debug(
                f"Transition {current.id} -> {following.id} at {time.isoformat()}: "
                f"window [{transition_start.isoformat()}, {transition_end.isoformat()}], "
                f"progress {progress:.3f}"
            )
        return Transition(outgoing=current, incoming=following, progress=progress)

    return None


def format_row_label(full_name: str, collapsed: bool) -> str:
    """Shorten a person's name for the row column.

    "William Miller" -> "William M." (expanded) or "W.M." (collapsed).
    A single word stays as-is when expanded and becomes "W." when collapsed.
    """
    if not full_name:
        return ""

    parts = full_name.strip().split(" ")

    if len(parts) == 1:
        return parts[0][:1] + "." if collapsed else parts[0]

    first_name = parts[0]
    last_initial = parts[-1][:1]

    if collapsed:
        return f"{first_name[:1]}.{last_initial}."

    return f"{first_name} {last_initial}."


def resolve_row_labels(
    rows: Sequence[Row],
    periods: Sequence[Period],
    reference_time: datetime,
    *,
    collapsed: bool = False,
) -> PeriodLabels:
    """Resolve the header label for every row at reference_time.

    During a handover every row gets a TransitioningLabel carrying the
    outgoing label as the current value and the incoming label alongside,
    with progress driving whatever cross-fade the caller performs.
    """
    transition = transition_window(reference_time, periods)

    labels: list[RowLabel] = []
    if transition is not None:
        for row in rows:
            outgoing = transition.outgoing.label_for(row.id)
            incoming = transition.incoming.label_for(row.id)
            labels.append(
                TransitioningLabel(
                    row_id=row.id,
                    outgoing_label=outgoing,
                    incoming_label=incoming,
                    progress=transition.progress,
                    display=format_row_label(outgoing, collapsed),
                    display_incoming=format_row_label(incoming, collapsed),
                )
            )
        return PeriodLabels(
            labels=labels, in_transition=True, transition_progress=transition.progress
        )

    period = active_period(reference_time, periods)
    for row in rows:
        label = period.label_for(row.id) if period else ""
        labels.append(
            SteadyLabel(row_id=row.id, label=label, display=format_row_label(label, collapsed))
        )
    return PeriodLabels(labels=labels, in_transition=False, transition_progress=0.0)


def transition_zones(periods: Sequence[Period], config: TimelineConfig) -> list[TransitionZone]:
    """Handover zones to shade on the grid.

    A zone starts at the outgoing period's end and lasts its
    transition_duration. Zones are clipped to the visible window and
    skipped when they fall entirely outside it.
    """
    zones: list[TransitionZone] = []
    total_minutes = config.total_minutes

    for period, following in zip(periods, periods[1:]):
        zone_start = period.end_time
        zone_end = zone_start + timedelta(minutes=period.transition_duration)

        if zone_end < config.start_date or zone_start > config.end_date:
            continue

        start_offset = max(0, minutes_between(config.start_date, zone_start))
        end_offset = min(total_minutes, minutes_between(config.start_date, zone_end))

        clipped_start = config.start_date + timedelta(minutes=start_offset)
        zones.append(
            TransitionZone(
                outgoing_id=period.id,
                incoming_id=following.id,
                start_time=clipped_start,
                end_time=config.start_date + timedelta(minutes=end_offset),
                left_percent=position_percentage(
                    clipped_start, config.start_date, config.end_date
                ),
                width_percent=(end_offset - start_offset) / total_minutes * 100,
                incoming_labels=dict(following.row_labels),
            )
        )

    return zones
