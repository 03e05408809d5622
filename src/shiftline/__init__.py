"""Shiftline - shift timeline layout, handover labels and cascade rescheduling."""

from .config import HourFormat, TimelineConfig, load_config
from .exceptions import ConfigError, ParseError, ShiftlineError, ValidationError
from .loader import dump_schedule, load_schedule
from .models import (
    AvailabilityStatus,
    EventMove,
    EventStatus,
    Period,
    Row,
    RowAvailability,
    RowIndicator,
    Schedule,
    StatusChange,
    Task,
    apply_moves,
)
from .timeline import (
    Accepted,
    CascadeScheduler,
    RejectedBlocked,
    RejectedOverlap,
    resolve_cascade,
    resolve_row_labels,
    transition_window,
    valid_drop_zones,
)

__version__ = "0.1.0"

__all__ = [
    "Accepted",
    "AvailabilityStatus",
    "CascadeScheduler",
    "ConfigError",
    "EventMove",
    "EventStatus",
    "HourFormat",
    "ParseError",
    "Period",
    "RejectedBlocked",
    "RejectedOverlap",
    "Row",
    "RowAvailability",
    "RowIndicator",
    "Schedule",
    "ShiftlineError",
    "StatusChange",
    "Task",
    "TimelineConfig",
    "ValidationError",
    "apply_moves",
    "dump_schedule",
    "load_config",
    "load_schedule",
    "resolve_cascade",
    "resolve_row_labels",
    "transition_window",
    "valid_drop_zones",
]
