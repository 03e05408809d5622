"""Timeline configuration models and YAML loading."""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError

DEFAULT_CONFIG_FILENAME = "shiftline_config.yaml"

# Layout defaults
DEFAULT_SLOT_DURATION = 5  # minutes
DEFAULT_SLOT_WIDTH = 12  # px
DEFAULT_ROW_COLUMN_WIDTH_EXPANDED = 120  # px
DEFAULT_ROW_COLUMN_WIDTH_COLLAPSED = 48  # px
SCROLL_COLLAPSE_THRESHOLD = 50  # px scrolled before the row column collapses


class HourFormat(str, Enum):
    """How hours are shown on the axis."""

    TWELVE_HOUR = "12h"  # "3:00 PM"
    TWENTY_FOUR_HOUR = "24h"  # "15:00"
    FRENCH = "french"  # "15h00"


class PeriodMarkerConfig(BaseModel):
    """Configuration for cyclic hour markers (T0, T1, ... T7)."""

    enabled: bool = False
    prefix: str = "T"
    reference_time: datetime | None = None  # T0; defaults to the window start


class InfiniteScrollConfig(BaseModel):
    """Configuration for extending the window when scrolling to an edge."""

    enabled: bool = False
    load_more_days: int = Field(default=1, ge=1)


class TimelineConfig(BaseModel):
    """Visible time window and layout settings.

    Derived values (total_minutes, slot_count, hour_count, grid_width) are
    computed properties so they always agree with the window.
    """

    start_date: datetime
    end_date: datetime
    slot_duration: int = DEFAULT_SLOT_DURATION
    hour_format: HourFormat = HourFormat.TWENTY_FOUR_HOUR
    show_now_indicator: bool = True
    auto_scroll_to_now: bool = True
    slot_width: int = DEFAULT_SLOT_WIDTH
    row_column_width_expanded: int = DEFAULT_ROW_COLUMN_WIDTH_EXPANDED
    row_column_width_collapsed: int = DEFAULT_ROW_COLUMN_WIDTH_COLLAPSED
    scroll_collapse_threshold: int = SCROLL_COLLAPSE_THRESHOLD
    infinite_scroll: InfiniteScrollConfig = Field(default_factory=InfiniteScrollConfig)
    period_markers: PeriodMarkerConfig = Field(default_factory=PeriodMarkerConfig)

    @model_validator(mode="after")
    def check_window(self) -> TimelineConfig:
        """Reject empty windows and non-positive slots."""
        if self.end_date <= self.start_date:
            raise ValueError(
                f"end_date ({self.end_date.isoformat()}) must be after "
                f"start_date ({self.start_date.isoformat()})"
            )
        if self.slot_duration <= 0:
            raise ValueError(f"slot_duration must be positive, got {self.slot_duration}")
        return self

    @property
    def total_minutes(self) -> int:
        """Whole minutes between start_date and end_date."""
        return int((self.end_date - self.start_date).total_seconds() // 60)

    @property
    def slot_count(self) -> int:
        """Number of slots covering the window (last one may be partial)."""
        return math.ceil(self.total_minutes / self.slot_duration)

    @property
    def hour_count(self) -> int:
        return math.ceil(self.total_minutes / 60)

    @property
    def grid_width(self) -> int:
        """Total grid width in pixels."""
        return self.slot_count * self.slot_width

    @property
    def marker_reference(self) -> datetime:
        return self.period_markers.reference_time or self.start_date


def load_config(config_path: Path | str) -> TimelineConfig:
    """Load timeline configuration from a YAML file.

    The file must contain a top-level ``timeline`` section.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e

    if not data:
        raise ConfigError("Empty configuration file")
    if not isinstance(data, dict) or "timeline" not in data:
        raise ConfigError("Config must contain a 'timeline' section")

    try:
        return TimelineConfig.model_validate(data["timeline"])
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid timeline configuration: {e}") from e


def discover_config(schedule_path: Path | None = None) -> Path | None:
    """Find a config file next to the schedule file or in the current directory."""
    candidates: list[Path] = []
    if schedule_path is not None:
        candidates.append(Path(schedule_path).parent / DEFAULT_CONFIG_FILENAME)
    candidates.append(Path(DEFAULT_CONFIG_FILENAME))
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None
