"""Issue tracking (wraps trx)."""

from __future__ import annotations

from typing import Annotated

import typer

from agntz.cli import app as main_app
from agntz.cli import get_settings
from agntz.commands._output import tool_errors
from agntz.core.process import run_tool

TOOL_NAME = "trx"

app = typer.Typer(
    name="issues",
    help="Issue tracking (wraps trx). Without a subcommand, lists all issues.",
    rich_markup_mode="markdown",
)
main_app.add_typer(app, name="issues", rich_help_panel="Issues")


def _run_trx(ctx: typer.Context, args: list[str]) -> None:
    with tool_errors():
        run_tool(TOOL_NAME, get_settings(ctx).binaries.issues, args)


@app.callback(invoke_without_command=True)
def issues_callback(ctx: typer.Context) -> None:
    """Issue tracking (wraps trx). Without a subcommand, lists all issues."""
    if ctx.invoked_subcommand is None:
        _run_trx(ctx, ["list"])


@app.command("list")
def list_issues(
    ctx: typer.Context,
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="Filter by status"),
    ] = None,
    issue_type: Annotated[
        str | None,
        typer.Option("--type", "-T", help="Filter by type"),
    ] = None,
) -> None:
    """List issues."""
    args = ["list"]
    if status:
        args.extend(["--status", status])
    if issue_type:
        args.extend(["--issue-type", issue_type])
    _run_trx(ctx, args)


@app.command("create")
def create(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Issue title")],
    issue_type: Annotated[
        str,
        typer.Option("--type", "-T", help="Issue type (bug, feature, task, epic, chore)"),
    ] = "task",
    priority: Annotated[
        int,
        typer.Option("--priority", "-p", min=0, max=4, help="Priority (0-4)"),
    ] = 2,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Description"),
    ] = None,
) -> None:
    """Create a new issue."""
    args = ["create", title, "-t", issue_type, "-p", str(priority)]
    if description:
        args.extend(["-d", description])
    _run_trx(ctx, args)


@app.command("update")
def update(
    ctx: typer.Context,
    issue_id: Annotated[str, typer.Argument(help="Issue ID")],
    status: Annotated[
        str | None,
        typer.Option("--status", help="New status"),
    ] = None,
    priority: Annotated[
        int | None,
        typer.Option("--priority", min=0, max=4, help="New priority"),
    ] = None,
) -> None:
    """Update an issue."""
    args = ["update", issue_id]
    if status:
        args.extend(["--status", status])
    if priority is not None:
        args.extend(["--priority", str(priority)])
    _run_trx(ctx, args)


@app.command("close")
def close(
    ctx: typer.Context,
    issue_id: Annotated[str, typer.Argument(help="Issue ID")],
    reason: Annotated[
        str | None,
        typer.Option("--reason", "-r", help="Reason for closing"),
    ] = None,
) -> None:
    """Close an issue."""
    args = ["close", issue_id]
    if reason:
        args.extend(["-r", reason])
    _run_trx(ctx, args)


@app.command("show")
def show(
    ctx: typer.Context,
    issue_id: Annotated[str, typer.Argument(help="Issue ID")],
) -> None:
    """Show issue details."""
    _run_trx(ctx, ["show", issue_id])


@main_app.command("ready", rich_help_panel="Issues")
def ready(ctx: typer.Context) -> None:
    """Show unblocked issues."""
    _run_trx(ctx, ["ready"])
