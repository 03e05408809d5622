"""Command-line interface for Shiftline."""

from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo
from pathlib import Path
from typing import Annotated

import typer

from .config import TimelineConfig, discover_config, load_config
from .exceptions import ShiftlineError, ValidationError
from .formatting import format_time
from .loader import dump_schedule, load_schedule
from .logger import setup_logger
from .models import Schedule
from .rendering import render_board
from .timeline import (
    CascadeScheduler,
    RejectedBlocked,
    RejectedOverlap,
    TransitioningLabel,
    resolve_row_labels,
)
from .timeline.clock import SystemClock

app = typer.Typer(
    name="shiftline",
    help="Shift timeline labels, layout and cascade rescheduling",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show moves, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: shiftline_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for shiftline commands."""
    setup_logger(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _is_aware(dt: datetime) -> bool:
    return dt.utcoffset() is not None


def _check_timezones(schedule: Schedule, config: TimelineConfig) -> None:
    """Reject a window and schedule that mix naive and timezone-aware times."""
    times = [config.start_date, config.end_date]
    if config.period_markers.reference_time is not None:
        times.append(config.period_markers.reference_time)
    for period in schedule.periods:
        times.extend((period.start_time, period.end_time))
    for event in schedule.events:
        times.extend((event.start_time, event.end_time))
        if event.actual_end_time is not None:
            times.append(event.actual_end_time)

    if len({_is_aware(t) for t in times}) > 1:
        raise ValidationError(
            "Schedule and timeline window mix timezone-aware and naive times; "
            "give every time a UTC offset or none at all"
        )


def _load(ctx: typer.Context, file: Path) -> tuple[Schedule, TimelineConfig]:
    """Load the schedule and its timeline config, exiting on errors."""
    try:
        schedule = load_schedule(file)
        config_path = ctx.obj.get("config_path") or discover_config(file)
        if config_path is not None:
            config = load_config(config_path)
        else:
            config = _default_config(schedule)
        _check_timezones(schedule, config)
    except (ShiftlineError, FileNotFoundError) as e:
        raise _fail(str(e)) from None
    return schedule, config


def _default_config(schedule: Schedule) -> TimelineConfig:
    """One-day window covering the first event or period, else today."""
    starts = [e.start_time for e in schedule.events] + [p.start_time for p in schedule.periods]
    anchor = min(starts) if starts else SystemClock().now()
    day_start = datetime.combine(anchor.date(), time(0, 0), tzinfo=anchor.tzinfo)
    return TimelineConfig(start_date=day_start, end_date=day_start + timedelta(days=1))


def _window_tz(config: TimelineConfig) -> tzinfo | None:
    return config.start_date.tzinfo


def _now(config: TimelineConfig) -> datetime:
    """Current time in the window's timezone (naive when the window is)."""
    return SystemClock(_window_tz(config)).now()


def _parse_time_option(value: str, config: TimelineConfig, option_name: str) -> datetime:
    """Parse a full ISO datetime, or a bare HH:MM on the window's first day.

    Values without a UTC offset take the window's timezone; values with one
    are converted to it.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            clock_time = time.fromisoformat(value)
        except ValueError:
            raise _fail(
                f"Invalid {option_name} '{value}'. Use YYYY-MM-DDTHH:MM or HH:MM"
            ) from None
        parsed = datetime.combine(config.start_date.date(), clock_time)

    if not _is_aware(parsed):
        return parsed.replace(tzinfo=_window_tz(config))
    if not _is_aware(config.start_date):
        raise _fail(
            f"{option_name.capitalize()} '{value}' has a UTC offset but the schedule times do not"
        )
    return parsed.astimezone(_window_tz(config))


def _find_row(schedule: Schedule, event_id: str) -> CascadeScheduler:
    event = schedule.get_event(event_id)
    if event is None:
        raise _fail(f"Unknown event '{event_id}'")
    row = schedule.get_row(event.row_id)
    if row is None:
        raise _fail(f"Event '{event_id}' is on unknown row '{event.row_id}'")
    return CascadeScheduler(row, schedule.events)


@app.command()
def move(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the schedule YAML file")],
    event_id: Annotated[str, typer.Argument(help="ID of the event to move")],
    start: Annotated[str, typer.Argument(help="New start time (YYYY-MM-DDTHH:MM or HH:MM)")],
    *,
    write: Annotated[
        bool, typer.Option("--write", help="Save the rescheduled events back to FILE")
    ] = False,
) -> None:
    """Move an event, cascading later events in its row."""
    schedule, config = _load(ctx, file)
    new_start = _parse_time_option(start, config, "start")
    outcome = _find_row(schedule, event_id).move(event_id, new_start)

    if isinstance(outcome, RejectedBlocked):
        typer.echo(f"Cannot move {event_id}: blocked event {outcome.task_id} is in the way")
        raise typer.Exit(1)
    if isinstance(outcome, RejectedOverlap):
        typer.echo(f"Cannot move {event_id}: {outcome.reason}")
        raise typer.Exit(1)

    for change in outcome.moves:
        typer.echo(
            f"{change.event_id}: {format_time(change.new_start_time, config.hour_format)}"
            f"-{format_time(change.new_end_time, config.hour_format)}"
        )

    if write:
        dump_schedule(schedule.with_moves(outcome.moves), file)
        typer.echo(f"Schedule written to {file}")


@app.command("drop-zones")
def drop_zones(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the schedule YAML file")],
    event_id: Annotated[str, typer.Argument(help="ID of the event being dragged")],
) -> None:
    """List every slot where the event could legally be dropped."""
    schedule, config = _load(ctx, file)
    zones = _find_row(schedule, event_id).drop_zones(event_id, config)
    if not zones:
        typer.echo(f"No legal drop zones for {event_id}")
        return
    for zone in zones:
        typer.echo(format_time(zone, config.hour_format))


@app.command()
def labels(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the schedule YAML file")],
    *,
    at: Annotated[
        str | None,
        typer.Option("--at", help="Reference time (YYYY-MM-DDTHH:MM or HH:MM). Defaults to now"),
    ] = None,
    collapsed: Annotated[
        bool, typer.Option("--collapsed", help="Use the collapsed (initials) form")
    ] = False,
) -> None:
    """Show each row's label at a reference time, including handovers."""
    schedule, config = _load(ctx, file)
    reference = _parse_time_option(at, config, "at") if at else _now(config)
    resolved = resolve_row_labels(schedule.rows, schedule.periods, reference, collapsed=collapsed)

    for label in resolved.labels:
        if isinstance(label, TransitioningLabel):
            typer.echo(
                f"{label.row_id}: {label.display} -> {label.display_incoming}"
                f" ({label.progress:.0%})"
            )
        else:
            typer.echo(f"{label.row_id}: {label.display}")


@app.command()
def board(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the schedule YAML file")],
    *,
    at: Annotated[
        str | None,
        typer.Option("--at", help="Reference time (YYYY-MM-DDTHH:MM or HH:MM). Defaults to now"),
    ] = None,
    collapsed: Annotated[
        bool, typer.Option("--collapsed", help="Use the collapsed (initials) form")
    ] = False,
) -> None:
    """Print a text board of rows, labels and events."""
    schedule, config = _load(ctx, file)
    reference = _parse_time_option(at, config, "at") if at else _now(config)
    typer.echo(render_board(schedule, config, reference, collapsed=collapsed), nl=False)


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    main()
