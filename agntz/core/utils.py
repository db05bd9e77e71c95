"""Console and logging helpers shared by all agntz commands."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def print_error_message(message: str, suggestion: str | None = None) -> None:
    """Print an error message to stderr, with an optional suggestion."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    if suggestion:
        err_console.print(f"[yellow]{escape(suggestion)}[/yellow]")


def setup_logging(log_level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging to use Rich on stderr, plus an optional log file.

    Logs go to stderr so they never interleave with output relayed from the
    wrapped tools on stdout.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: list[logging.Handler] = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
