"""Timeline core - coordinate mapping, period handover and cascade moves.

Main entry points:
- resolve_cascade / CascadeScheduler: move legality and forced shifts in a row
- transition_window / resolve_row_labels: handover detection and row labels
- position_percentage / to_pixel / snap_to_slot / hour_markers: axis mapping
"""

from .cascade import (
    Accepted,
    CascadeOutcome,
    CascadeScheduler,
    RejectedBlocked,
    RejectedOverlap,
    resolve_cascade,
    valid_drop_zones,
)
from .clock import Clock, FixedClock, NowIndicator, SystemClock, now_indicator
from .coords import (
    current_time_slot,
    from_pixel,
    hour_markers,
    minutes_between,
    period_marker,
    position_percentage,
    slot_index_to_time,
    snap_to_slot,
    time_to_slot_index,
    to_pixel,
    width_percentage,
)
from .layout import (
    DurationInfo,
    EventLayout,
    VisibleRange,
    duration_info,
    event_layout,
    extend_window,
    initial_scroll_position,
    is_collapsed,
    layout_events,
    row_column_width,
    scroll_edge,
    scroll_position_for_time,
    slot_click_time,
    time_from_scroll_position,
    visible_range,
)
from .periods import (
    PeriodLabels,
    RowLabel,
    SteadyLabel,
    Transition,
    TransitioningLabel,
    TransitionZone,
    active_period,
    format_row_label,
    resolve_row_labels,
    transition_window,
    transition_zones,
)

__all__ = [
    # Cascade
    "Accepted",
    "RejectedOverlap",
    "RejectedBlocked",
    "CascadeOutcome",
    "CascadeScheduler",
    "resolve_cascade",
    "valid_drop_zones",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    "NowIndicator",
    "now_indicator",
    # Coordinates
    "minutes_between",
    "position_percentage",
    "width_percentage",
    "to_pixel",
    "from_pixel",
    "time_to_slot_index",
    "slot_index_to_time",
    "snap_to_slot",
    "hour_markers",
    "period_marker",
    "current_time_slot",
    # Layout
    "EventLayout",
    "VisibleRange",
    "DurationInfo",
    "event_layout",
    "layout_events",
    "scroll_position_for_time",
    "time_from_scroll_position",
    "visible_range",
    "is_collapsed",
    "row_column_width",
    "slot_click_time",
    "duration_info",
    "initial_scroll_position",
    "scroll_edge",
    "extend_window",
    # Periods
    "Transition",
    "SteadyLabel",
    "TransitioningLabel",
    "RowLabel",
    "PeriodLabels",
    "TransitionZone",
    "active_period",
    "transition_window",
    "format_row_label",
    "resolve_row_labels",
    "transition_zones",
]
