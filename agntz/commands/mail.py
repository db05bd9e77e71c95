"""Mail, messaging and file reservations (wraps mailz)."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Typer evaluates annotations at runtime
from typing import Annotated

import typer

from agntz import constants
from agntz.cli import app as main_app
from agntz.cli import get_settings
from agntz.commands._output import error, tool_errors
from agntz.core.process import run_tool

TOOL_NAME = "mailz"

app = typer.Typer(
    name="mail",
    help="Mail and messaging between agents (wraps mailz).",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
main_app.add_typer(app, name="mail", rich_help_panel="Coordination")


def _run_mailz(ctx: typer.Context, args: list[str]) -> None:
    with tool_errors():
        run_tool(TOOL_NAME, get_settings(ctx).binaries.mail, args)


@app.command("inbox")
def inbox(ctx: typer.Context) -> None:
    """Check inbox."""
    _run_mailz(ctx, ["inbox"])


@app.command("send")
def send(
    ctx: typer.Context,
    to: Annotated[str, typer.Argument(help="Recipient")],
    subject: Annotated[str, typer.Argument(help="Subject")],
    body: Annotated[
        str | None,
        typer.Option("--body", "-b", help="Message body"),
    ] = None,
) -> None:
    """Send a message."""
    args = ["send", to, subject]
    if body is not None:
        args.extend(["--body", body])
    _run_mailz(ctx, args)


@app.command("read")
def read(
    ctx: typer.Context,
    message_id: Annotated[str, typer.Argument(help="Message ID")],
) -> None:
    """Read a message."""
    _run_mailz(ctx, ["read", message_id])


@app.command("ack")
def ack(
    ctx: typer.Context,
    message_id: Annotated[str, typer.Argument(help="Message ID")],
) -> None:
    """Acknowledge a message."""
    _run_mailz(ctx, ["ack", message_id])


@app.command("search")
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query")],
) -> None:
    """Search messages."""
    _run_mailz(ctx, ["search", query])


# --- File reservations (top-level commands) ---


@main_app.command("reserve", rich_help_panel="Coordination")
def reserve(
    ctx: typer.Context,
    files: Annotated[list[Path], typer.Argument(help="Files to reserve")],
    reason: Annotated[
        str | None,
        typer.Option("--reason", "-r", help="Reason for reservation"),
    ] = None,
    ttl: Annotated[
        int,
        typer.Option("--ttl", min=1, help="Reservation lifetime in seconds"),
    ] = constants.DEFAULT_RESERVATION_TTL,
) -> None:
    """Reserve files before editing them, so other agents leave them alone."""
    args = ["reserve", *(str(f) for f in files), "--ttl", str(ttl)]
    if reason:
        args.extend(["--reason", reason])
    _run_mailz(ctx, args)


@main_app.command("reservations", rich_help_panel="Coordination")
def reservations(ctx: typer.Context) -> None:
    """List active reservations."""
    _run_mailz(ctx, ["reservations"])


@main_app.command("release", rich_help_panel="Coordination")
def release(
    ctx: typer.Context,
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Files to release (or use --all)"),
    ] = None,
    all_files: Annotated[
        bool,
        typer.Option("--all", help="Release all reservations"),
    ] = False,
) -> None:
    """Release file reservations."""
    if all_files:
        _run_mailz(ctx, ["release", "--all"])
        return
    if not files:
        error("Specify files to release, or use --all")
    _run_mailz(ctx, ["release", *(str(f) for f in files)])
