"""Root CLI for agntz."""

from __future__ import annotations

from typing import Annotated, Any

import typer

from agntz import __version__
from agntz.config import Settings, load_config, settings_from_config
from agntz.core.utils import console, setup_logging

app = typer.Typer(
    name="agntz",
    help="Agent utility toolkit for AI coding agents.",
    add_completion=True,
    rich_markup_mode="markdown",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"agntz {__version__}")
        raise typer.Exit


def _subcommands(command: Any) -> dict[str, Any] | None:
    """Return the subcommands of a command group, or None for a plain command."""
    commands = getattr(command, "commands", None)
    return commands if isinstance(commands, dict) else None


def _defaults_for(
    command: Any,
    section: dict[str, Any],
    wildcard: dict[str, Any],
) -> dict[str, Any]:
    """Build the click default map for a command, recursing into groups."""
    flat = {k: v for k, v in section.items() if not isinstance(v, dict)}
    subcommands = _subcommands(command)
    if subcommands is None:
        return {**wildcard, **flat}
    defaults: dict[str, Any] = dict(flat)
    for name, sub in subcommands.items():
        nested = section.get(name, {})
        defaults[name] = _defaults_for(sub, nested if isinstance(nested, dict) else {}, wildcard)
    return defaults


def set_config_defaults(ctx: typer.Context, config: dict[str, Any]) -> None:
    """Set the default values for every subcommand from the config file.

    ``[defaults]`` applies to all commands; a table named after a command
    (``[search]``, ``[memory.search]``) overrides it for that command.
    """
    wildcard = {k: v for k, v in config.get("defaults", {}).items() if not isinstance(v, dict)}
    subcommands = _subcommands(ctx.command)
    if subcommands is None:
        ctx.default_map = wildcard
        return
    default_map = {}
    for name, sub in subcommands.items():
        section = config.get(name, {})
        default_map[name] = _defaults_for(sub, section if isinstance(section, dict) else {}, wildcard)
    ctx.default_map = default_map


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings built by the root callback."""
    if isinstance(ctx.obj, dict) and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return Settings()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: Annotated[
        str | None,
        typer.Option("--config", help="Path to a TOML config file."),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Set the log level (e.g., DEBUG, INFO, WARNING)."),
    ] = "WARNING",
    log_file: Annotated[
        str | None,
        typer.Option("--log-file", help="Path to a file to write logs to."),
    ] = None,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Agent utility toolkit: memory, mail, issues, history search and scheduling."""
    if ctx.invoked_subcommand is None:
        console.print("[bold red]No command specified.[/bold red]")
        console.print("[bold yellow]Running --help for your convenience.[/bold yellow]")
        console.print(ctx.get_help())
        raise typer.Exit
    import dotenv  # noqa: PLC0415

    dotenv.load_dotenv()
    setup_logging(log_level, log_file)

    config = load_config(config_file)
    set_config_defaults(ctx, config)
    ctx.obj = {"settings": settings_from_config(config)}


# Import commands from other modules to register them
from agntz.commands import (  # noqa: E402, F401
    init,
    issues,
    mail,
    memory,
    schedule,
    search,
    tools,
)
