"""Install, update and check the wrapped agent tools."""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from agntz.cli import app as main_app
from agntz.cli import get_settings
from agntz.commands._cli_options import JsonOutput  # noqa: TC001
from agntz.commands._output import error, info, success, warn
from agntz.core.process import is_installed
from agntz.core.utils import console

if TYPE_CHECKING:
    from agntz.config import Settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tools",
    help="Manage the agent tools that agntz wraps.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
main_app.add_typer(app, name="tools", rich_help_panel="Installation")


@dataclass(frozen=True)
class ToolInfo:
    """A wrapped tool and how to install it."""

    name: str
    description: str
    role: str
    """Field of ``Binaries`` holding the tool's executable."""
    install_cmd: tuple[str, ...]

    def binary(self, settings: Settings) -> str:
        return getattr(settings.binaries, self.role)


TOOLS: tuple[ToolInfo, ...] = (
    ToolInfo("mmry", "Memory storage and search", "memory", ("cargo", "install", "mmry-cli")),
    ToolInfo("mailz", "Agent coordination and messaging", "mail", ("cargo", "install", "mailz")),
    ToolInfo("trx", "Issue tracking", "issues", ("cargo", "install", "trx")),
    ToolInfo("skdlr", "Task scheduling", "schedule", ("cargo", "install", "skdlr")),
    ToolInfo("hstry", "Agent session history search", "search", ("cargo", "install", "hstry")),
)


def get_tool(name: str) -> ToolInfo | None:
    """Look up a tool by name."""
    return next((t for t in TOOLS if t.name == name), None)


def _select(name: str) -> list[ToolInfo]:
    if name == "all":
        return list(TOOLS)
    tool = get_tool(name)
    if tool is None:
        available = ", ".join(t.name for t in TOOLS)
        error(f"Unknown tool: {name}. Available: {available}")
    return [tool]


def _run_install(cmd: list[str]) -> bool:
    """Run an install command with inherited stdio; report success."""
    logger.debug("Running: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, check=False)
    except FileNotFoundError:
        warn(f"{cmd[0]} not found; cannot run: {shlex.join(cmd)}")
        return False
    except OSError as e:
        warn(f"Could not run {shlex.join(cmd)}: {e.strerror or e}")
        return False
    return result.returncode == 0


@app.command("list")
def list_tools(ctx: typer.Context, json_output: JsonOutput = False) -> None:
    """List available tools and whether they are installed."""
    settings = get_settings(ctx)

    if json_output:
        data = [
            {
                "name": tool.name,
                "binary": tool.binary(settings),
                "description": tool.description,
                "is_installed": is_installed(tool.binary(settings)),
            }
            for tool in TOOLS
        ]
        print(json.dumps({"tools": data}))
        return

    table = Table(title="Agent Tools")
    table.add_column("Status", width=3)
    table.add_column("Name", style="cyan")
    table.add_column("Binary", style="dim")
    table.add_column("Description")

    for tool in TOOLS:
        status = "[green]✓[/green]" if is_installed(tool.binary(settings)) else "[red]✗[/red]"
        table.add_row(status, tool.name, tool.binary(settings), tool.description)

    console.print(table)
    console.print("\nInstall with: [cyan]agntz tools install <name>[/cyan]")
    console.print("Install all:  [cyan]agntz tools install all[/cyan]")


@app.command("install")
def install(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Tool name (mmry, mailz, trx, skdlr, hstry, or all)")],
) -> None:
    """Install a tool, or all of them."""
    settings = get_settings(ctx)
    failed = []
    for tool in _select(name):
        if is_installed(tool.binary(settings)):
            info(f"{tool.name} is already installed")
            continue
        info(f"Installing {tool.name}...")
        if _run_install(list(tool.install_cmd)):
            success(f"{tool.name} installed successfully")
        else:
            failed.append(tool.name)
            warn(f"{tool.name} installation failed")
    if failed:
        raise typer.Exit(1)


@app.command("update")
def update(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Tool name, or all")],
) -> None:
    """Update a tool by reinstalling it. With `all`, only installed tools are updated."""
    settings = get_settings(ctx)
    tools = _select(name)
    if name == "all":
        tools = [t for t in tools if is_installed(t.binary(settings))]

    failed = []
    for tool in tools:
        info(f"Updating {tool.name}...")
        if _run_install([*tool.install_cmd, "--force"]):
            success(f"{tool.name} updated successfully")
        else:
            failed.append(tool.name)
            warn(f"{tool.name} update failed")
    if failed:
        raise typer.Exit(1)


@app.command("doctor")
def doctor(ctx: typer.Context) -> None:
    """Check that every tool is installed."""
    settings = get_settings(ctx)
    console.print("[bold]Checking tool health...[/bold]\n")

    missing = []
    for tool in TOOLS:
        binary = tool.binary(settings)
        if is_installed(binary):
            success(f"{tool.name}: OK ({binary})")
        else:
            missing.append(tool.name)
            console.print(f"  [red]✗[/red] {tool.name}: MISSING ({binary})")

    console.print()
    if missing:
        console.print("Some tools are missing. Install with: [cyan]agntz tools install all[/cyan]")
    else:
        console.print("All tools are installed and ready.")
