"""Tests for timeline configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from shiftline.config import HourFormat, TimelineConfig, discover_config, load_config
from shiftline.exceptions import ConfigError
from tests.conftest import at


class TestTimelineConfig:
    def test_defaults(self) -> None:
        config = TimelineConfig(start_date=at(0), end_date=at(24))

        assert config.slot_duration == 5
        assert config.hour_format == HourFormat.TWENTY_FOUR_HOUR
        assert config.show_now_indicator
        assert not config.infinite_scroll.enabled
        assert config.period_markers.prefix == "T"
        assert config.marker_reference == at(0)

    def test_derived_values(self) -> None:
        config = TimelineConfig(start_date=at(8), end_date=at(18, 10), slot_duration=15)

        assert config.total_minutes == 610
        assert config.slot_count == 41  # ceil(610 / 15)
        assert config.hour_count == 11
        assert config.grid_width == 41 * 12

    def test_empty_window_rejected(self) -> None:
        with pytest.raises(PydanticValidationError, match="must be after"):
            TimelineConfig(start_date=at(8), end_date=at(8))

    def test_non_positive_slot_rejected(self) -> None:
        with pytest.raises(PydanticValidationError, match="slot_duration"):
            TimelineConfig(start_date=at(8), end_date=at(9), slot_duration=0)


class TestLoadConfig:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "shiftline_config.yaml"
        path.write_text(
            "timeline:\n"
            "  start_date: 2025-01-06T06:00:00\n"
            "  end_date: 2025-01-06T18:00:00\n"
            "  slot_duration: 10\n"
            "  hour_format: french\n"
            "  period_markers:\n"
            "    enabled: true\n"
            "    reference_time: 2025-01-06T08:00:00\n"
        )
        config = load_config(path)

        assert config.start_date == at(6)
        assert config.slot_duration == 10
        assert config.hour_format == HourFormat.FRENCH
        assert config.marker_reference == at(8)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="Empty"):
            load_config(path)

    def test_missing_section(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("other: 1\n")
        with pytest.raises(ConfigError, match="timeline"):
            load_config(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "timeline:\n"
            "  start_date: 2025-01-06T18:00:00\n"
            "  end_date: 2025-01-06T06:00:00\n"
        )
        with pytest.raises(ConfigError, match="Invalid timeline configuration"):
            load_config(path)

    def test_discover_next_to_schedule(self, tmp_path: Path) -> None:
        config_path = tmp_path / "shiftline_config.yaml"
        config_path.write_text("timeline: {}\n")
        assert discover_config(tmp_path / "schedule.yaml") == config_path
