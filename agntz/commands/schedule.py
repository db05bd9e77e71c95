"""Task scheduling (wraps skdlr)."""

from __future__ import annotations

from typing import Annotated

import typer

from agntz.cli import app as main_app
from agntz.cli import get_settings
from agntz.commands._output import tool_errors
from agntz.core.process import run_tool

TOOL_NAME = "skdlr"

app = typer.Typer(
    name="schedule",
    help="""Task scheduling (wraps skdlr).

Schedules use cron expressions, e.g. `0 8 * * *` for daily at 8am.
""",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
main_app.add_typer(app, name="schedule", rich_help_panel="Scheduling")

Name = Annotated[str, typer.Argument(help="Schedule name")]


def _run_skdlr(ctx: typer.Context, args: list[str]) -> None:
    with tool_errors():
        run_tool(TOOL_NAME, get_settings(ctx).binaries.schedule, args)


def _edit_args(
    schedule: str | None,
    command: str | None,
    workdir: str | None,
    description: str | None,
) -> list[str]:
    args: list[str] = []
    for flag, value in (
        ("--schedule", schedule),
        ("--command", command),
        ("--workdir", workdir),
        ("--description", description),
    ):
        if value is not None:
            args.extend([flag, value])
    return args


@app.command("add")
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Schedule name (identifier)")],
    schedule: Annotated[
        str,
        typer.Option("--schedule", "-s", help='Cron expression (e.g. "0 8 * * *")'),
    ],
    command: Annotated[
        str,
        typer.Option("--command", "-c", help="Command to execute"),
    ],
    workdir: Annotated[
        str | None,
        typer.Option("--workdir", "-w", help="Working directory"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Description"),
    ] = None,
    disabled: Annotated[
        bool,
        typer.Option("--disabled", help="Start disabled"),
    ] = False,
) -> None:
    """Add a new scheduled task."""
    args = ["add", name, *_edit_args(schedule, command, workdir, description)]
    if disabled:
        args.extend(["--enabled", "false"])
    _run_skdlr(ctx, args)


@app.command("list")
def list_schedules(
    ctx: typer.Context,
    status: Annotated[
        str | None,
        typer.Option("--status", help="Filter by status (enabled/disabled)"),
    ] = None,
) -> None:
    """List all schedules."""
    args = ["list"]
    if status:
        args.extend(["--status", status])
    _run_skdlr(ctx, args)


@app.command("show")
def show(ctx: typer.Context, name: Name) -> None:
    """Show schedule details."""
    _run_skdlr(ctx, ["show", name])


@app.command("edit")
def edit(
    ctx: typer.Context,
    name: Name,
    schedule: Annotated[
        str | None,
        typer.Option("--schedule", "-s", help="New cron expression"),
    ] = None,
    command: Annotated[
        str | None,
        typer.Option("--command", "-c", help="New command"),
    ] = None,
    workdir: Annotated[
        str | None,
        typer.Option("--workdir", "-w", help="New working directory"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="New description"),
    ] = None,
) -> None:
    """Edit an existing schedule."""
    _run_skdlr(ctx, ["edit", name, *_edit_args(schedule, command, workdir, description)])


@app.command("remove")
def remove(
    ctx: typer.Context,
    name: Name,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation"),
    ] = False,
) -> None:
    """Remove a schedule."""
    args = ["remove", name]
    if yes:
        args.append("--yes")
    _run_skdlr(ctx, args)


@app.command("enable")
def enable(ctx: typer.Context, name: Name) -> None:
    """Enable a schedule."""
    _run_skdlr(ctx, ["enable", name])


@app.command("disable")
def disable(ctx: typer.Context, name: Name) -> None:
    """Disable a schedule."""
    _run_skdlr(ctx, ["disable", name])


@app.command("run")
def run(
    ctx: typer.Context,
    name: Name,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would run without executing"),
    ] = False,
) -> None:
    """Trigger an immediate run."""
    args = ["run", name]
    if dry_run:
        args.append("--dry-run")
    _run_skdlr(ctx, args)


@app.command("logs")
def logs(
    ctx: typer.Context,
    name: Name,
    last: Annotated[
        int,
        typer.Option("--last", min=1, help="Number of runs to show"),
    ] = 10,
) -> None:
    """View execution history."""
    _run_skdlr(ctx, ["logs", name, "--last", str(last)])


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show status overview."""
    _run_skdlr(ctx, ["status"])


@app.command("next")
def next_runs(ctx: typer.Context) -> None:
    """Show upcoming runs."""
    _run_skdlr(ctx, ["next"])


@app.command("backend")
def backend(ctx: typer.Context) -> None:
    """Show the active scheduler backend."""
    _run_skdlr(ctx, ["backend"])


@app.command("doctor")
def doctor(ctx: typer.Context) -> None:
    """Check scheduler health."""
    _run_skdlr(ctx, ["doctor"])
