"""Console output helpers for the agntz commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.markup import escape

from agntz.core.errors import AgntzError
from agntz.core.utils import console, err_console

if TYPE_CHECKING:
    from collections.abc import Iterator


def error(msg: str) -> NoReturn:
    """Print an error message and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(msg)}", highlight=False)
    raise typer.Exit(1)


def success(msg: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {escape(msg)}")


def info(msg: str) -> None:
    """Print an info message."""
    console.print(f"[dim]→[/dim] {escape(msg)}")


def warn(msg: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(msg)}")


@contextmanager
def tool_errors() -> Iterator[None]:
    """Turn agntz errors raised inside the block into an error message and exit code 1."""
    try:
        yield
    except AgntzError as e:
        error(str(e).strip())
