"""Example rendering strategies for shiftline boards.

Usage:
    python examples/custom_renderer.py examples/shift_schedule.yaml
"""

import sys
from datetime import datetime

from shiftline.config import load_config
from shiftline.loader import load_schedule
from shiftline.models import Row, Task
from shiftline.rendering import RendererRegistry, render_board
from shiftline.timeline import DurationInfo, EventLayout, RowLabel


class BlockedEventRenderer:
    """Shout about blocked events so nobody tries to drag them."""

    def render_event(
        self, task: Task, layout: EventLayout, duration: DurationInfo, default: str
    ) -> str:
        return f"!! {default} (locked at {layout.left:.1f}%)"


class BadgeLabelRenderer:
    """Prefix row labels with the row's indicator colour."""

    def render_row_label(self, row: Row, label: RowLabel, collapsed: bool, default: str) -> str:
        color = row.indicator.color if row.indicator else "-"
        return f"({color}) {default}"


def main(path: str) -> None:
    schedule = load_schedule(path)
    config = load_config("examples/shiftline_config.yaml")

    registry = RendererRegistry(config)
    registry.register_event_renderer(BlockedEventRenderer(), statuses=["blocked"])
    registry.register_row_label_renderer(BadgeLabelRenderer())

    print(render_board(schedule, config, datetime(2025, 1, 6, 8, 5), registry), end="")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "examples/shift_schedule.yaml")
