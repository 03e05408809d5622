"""Tests for renderer registration and text boards."""

from dataclasses import replace

from shiftline.config import HourFormat, TimelineConfig
from shiftline.models import (
    AvailabilityStatus,
    EventStatus,
    Period,
    Row,
    RowAvailability,
    Schedule,
    Task,
)
from shiftline.rendering import RendererRegistry, render_board
from shiftline.timeline import DurationInfo, EventLayout, RowLabel
from tests.conftest import at, task


class UpperEventRenderer:
    def render_event(
        self, task: Task, layout: EventLayout, duration: DurationInfo, default: str
    ) -> str:
        return default.upper()


class NamedEventRenderer:
    def __init__(self, name: str):
        self.name = name

    def render_event(
        self, task: Task, layout: EventLayout, duration: DurationInfo, default: str
    ) -> str:
        return self.name


class InitialsLabelRenderer:
    def render_row_label(self, row: Row, label: RowLabel, collapsed: bool, default: str) -> str:
        return f"<{label.label[:1]}>"


def _schedule(shifts: list[Period]) -> Schedule:
    return Schedule(
        rows=[
            Row(id="row-1"),
            Row(
                id="row-2",
                availability=RowAvailability(
                    status=AvailabilityStatus.ABSENT, label="out of office"
                ),
            ),
        ],
        periods=shifts,
        events=[
            task("B", at(13), at(14), status=EventStatus.BLOCKED),
            replace(task("A", at(10), at(11, 30), status=EventStatus.DELAYED), title="Intake"),
            task("Z", at(10), at(11), row_id="row-2"),
        ],
    )


class TestRendererRegistry:
    def test_default_event_rendering(self, day_config: TimelineConfig) -> None:
        registry = RendererRegistry(day_config)
        delayed = replace(
            task("A", at(10), at(11, 30), status=EventStatus.DELAYED),
            title="Intake",
            actual_duration=120,
        )
        assert (
            registry.render_event(delayed, day_config)
            == "[10:00-11:30] Intake  2h (30 min. delayed)  <delayed>"
        )

    def test_default_uses_hour_format(self) -> None:
        config = TimelineConfig(
            start_date=at(8), end_date=at(18), hour_format=HourFormat.TWELVE_HOUR
        )
        rendered = RendererRegistry(config).render_event(task("A", at(13), at(14)), config)
        assert rendered == "[1:00 PM-2:00 PM] A  1h"

    def test_custom_renderer_receives_default(self, day_config: TimelineConfig) -> None:
        registry = RendererRegistry(day_config)
        registry.register_event_renderer(UpperEventRenderer())

        rendered = registry.render_event(replace(task("A", at(10), at(11)), title="x"), day_config)
        assert rendered == "[10:00-11:00] X  1H"

    def test_status_scoped_renderer(self, day_config: TimelineConfig) -> None:
        registry = RendererRegistry(day_config)
        registry.register_event_renderer(NamedEventRenderer("locked"), statuses=["blocked"])

        blocked = task("B", at(13), at(14), status=EventStatus.BLOCKED)
        assert registry.render_event(blocked, day_config) == "locked"
        assert registry.render_event(task("A", at(10), at(11)), day_config) != "locked"

    def test_priority_ordering(self, day_config: TimelineConfig) -> None:
        registry = RendererRegistry(day_config)
        registry.register_event_renderer(NamedEventRenderer("high"), priority=20)
        registry.register_event_renderer(NamedEventRenderer("low"), priority=1)
        registry.register_event_renderer(NamedEventRenderer("later-high"), priority=20)

        assert registry.render_event(task("A", at(10), at(11)), day_config) == "later-high"

    def test_row_scoped_label_renderer(
        self, day_config: TimelineConfig, shifts: list[Period]
    ) -> None:
        registry = RendererRegistry(day_config)
        registry.register_row_label_renderer(InitialsLabelRenderer(), row_ids=["row-1"])

        board = render_board(_schedule(shifts), day_config, at(12), registry)
        assert "row-1  <S>" in board
        assert "row-2  Emmi" in board


class TestRenderBoard:
    def test_board_layout(self, day_config: TimelineConfig, shifts: list[Period]) -> None:
        board = render_board(_schedule(shifts), day_config, at(13))
        lines = board.splitlines()

        assert lines[0] == "Window 2025-01-06 08:00 - 2025-01-06 18:00 (slot 15min)"
        assert lines[1] == "Hours  " + "  ".join(f"{h:02d}:00" for h in range(8, 19))
        assert lines[2] == (
            "Shift handover 08:00-08:15 morning -> afternoon: row-1 Sophie A., row-2 Emmi"
        )
        assert lines[3] == "Now 13:00 (50.0%)"
        assert lines[4] == "row-1  Sophie A."
        assert lines[5].startswith("  [10:00-11:30] Intake")
        assert lines[6] == "  [13:00-14:00] B  1h  <blocked>"
        assert lines[7] == "row-2  Emmi"
        assert lines[8] == "  — out of office"
        assert len(lines) == 9

    def test_board_during_handover(self, day_config: TimelineConfig, shifts: list[Period]) -> None:
        board = render_board(_schedule(shifts), day_config, at(8))

        assert "Handover in progress (50%)" in board
        assert "row-1  William M. -> Sophie A. (50%)" in board

    def test_now_hidden_outside_window(
        self, day_config: TimelineConfig, shifts: list[Period]
    ) -> None:
        board = render_board(_schedule(shifts), day_config, at(20))
        assert "Now" not in board

    def test_collapsed_labels(self, day_config: TimelineConfig, shifts: list[Period]) -> None:
        board = render_board(_schedule(shifts), day_config, at(12), collapsed=True)
        assert "row-1  S.A." in board

    def test_period_markers_in_header(self, shifts: list[Period]) -> None:
        config = TimelineConfig.model_validate(
            {
                "start_date": at(8),
                "end_date": at(18),
                "hour_format": "12h",
                "period_markers": {"enabled": True, "prefix": "H", "reference_time": at(9)},
            }
        )
        header = render_board(_schedule(shifts), config, at(13)).splitlines()[1]

        assert header.startswith("Hours  8 AM H7  9 AM H0  10 AM H1")
        assert header.endswith("6 PM H1")

    def test_markers_off_by_default(self, day_config: TimelineConfig, shifts: list[Period]) -> None:
        header = render_board(_schedule(shifts), day_config, at(13)).splitlines()[1]
        assert "T0" not in header

    def test_handover_zone_outside_window_omitted(self, shifts: list[Period]) -> None:
        config = TimelineConfig(start_date=at(9), end_date=at(18), slot_duration=15)
        board = render_board(_schedule(shifts), config, at(13))
        assert "Shift handover" not in board

    def test_handover_zone_uses_collapsed_labels(
        self, day_config: TimelineConfig, shifts: list[Period]
    ) -> None:
        board = render_board(_schedule(shifts), day_config, at(13), collapsed=True)
        assert "Shift handover 08:00-08:15 morning -> afternoon: row-1 S.A., row-2 E." in board
