"""Memory operations (wraps mmry)."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import BaseModel, TypeAdapter, ValidationError

from agntz import constants
from agntz.cli import app as main_app
from agntz.cli import get_settings
from agntz.commands._cli_options import JsonOutput  # noqa: TC001
from agntz.commands._output import success, tool_errors
from agntz.core.errors import InvalidResponseError
from agntz.core.identity import AgentIdentity, detect_agent, identity_env
from agntz.core.process import run_tool
from agntz.core.repo import get_repo_name

logger = logging.getLogger(__name__)

TOOL_NAME = "mmry"

app = typer.Typer(
    name="memory",
    help="Memory operations (wraps mmry). Memories are stored per repository.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
main_app.add_typer(app, name="memory", rich_help_panel="Memory")


class ExportFormat(str, Enum):
    """Memory export formats."""

    json = "json"
    md = "md"
    markdown = "markdown"


class Memory(BaseModel):
    """A memory as written by ``mmry export``."""

    content: str
    category: str | None = None
    importance: int | None = None
    created_at: str | None = None


_MEMORY_LIST = TypeAdapter(list[Memory])


def _run_mmry(
    ctx: typer.Context,
    args: list[str],
    *,
    repo: str | None,
    identity: AgentIdentity | None,
) -> None:
    """Run mmry scoped to the repo store, attributing the call to the detected agent."""
    full_args = ["--store", repo, *args] if repo else list(args)
    with tool_errors():
        run_tool(
            TOOL_NAME,
            get_settings(ctx).binaries.memory,
            full_args,
            env=identity_env(identity, repo),
        )


def _run_scoped(ctx: typer.Context, args: list[str]) -> None:
    _run_mmry(ctx, args, repo=get_repo_name(), identity=detect_agent(os.environ))


@app.command("add")
def add(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="Memory content (or - to read from stdin)")],
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Category"),
    ] = None,
    tags: Annotated[
        str | None,
        typer.Option("--tags", "-t", help="Tags (comma-separated)"),
    ] = None,
    importance: Annotated[
        int | None,
        typer.Option("--importance", "-i", min=1, max=10, help="Importance (1-10)"),
    ] = None,
) -> None:
    """Add a memory."""
    if content == "-":
        content = sys.stdin.read()

    args = ["add", content]
    if category:
        args.extend(["-c", category])
    if tags:
        args.extend(["-t", tags])
    if importance is not None:
        args.extend(["-i", str(importance)])
    _run_scoped(ctx, args)


@app.command("search")
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query")],
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Search mode (e.g. hybrid, keyword, semantic)"),
    ] = "hybrid",
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=0, help="Maximum results"),
    ] = 10,
    json_output: JsonOutput = False,
) -> None:
    """Search memories."""
    args = ["search", query, "--mode", mode, "--limit", str(limit)]
    if json_output:
        args.append("--json")
    _run_scoped(ctx, args)


def _default_export_path(fmt: ExportFormat) -> Path:
    memories_dir = Path(constants.MEMORIES_DIR)
    memories_dir.mkdir(parents=True, exist_ok=True)
    filename = "export.json" if fmt is ExportFormat.json else "export.md"
    return memories_dir / filename


def memories_to_markdown(memories: list[Memory]) -> str:
    """Render memories grouped by category, in order of first appearance."""
    by_category: dict[str, list[Memory]] = {}
    for memory in memories:
        by_category.setdefault(memory.category or "uncategorized", []).append(memory)

    lines = ["# Memories", ""]
    for category, items in by_category.items():
        lines.extend([f"## {category}", ""])
        for memory in items:
            importance = f" [i:{memory.importance}]" if memory.importance is not None else ""
            lines.append(f"- {memory.content.strip()}{importance}")
        lines.append("")
    return "\n".join(lines) + "\n"


def _remove_temp_file(path: Path) -> bool:
    """Delete a temporary file; report whether it is gone."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove temp file %s: %s", path, e)
        return False
    return True


def _export_markdown(ctx: typer.Context, output: Path, *, all_stores: bool) -> None:
    fd, temp_name = tempfile.mkstemp(prefix="agntz_export_", suffix=".json")
    os.close(fd)
    temp_json = Path(temp_name)
    try:
        args = ["export", "-o", str(temp_json)]
        if all_stores:
            args.append("--all")
        _run_scoped(ctx, args)

        with tool_errors():
            try:
                memories = _MEMORY_LIST.validate_json(temp_json.read_bytes())
            except ValidationError as e:
                raise InvalidResponseError(TOOL_NAME, str(e)) from None

        output.write_text(memories_to_markdown(memories), encoding="utf-8")
    finally:
        _remove_temp_file(temp_json)

    success(f"Exported {len(memories)} memories to {output}")


@app.command("export")
def export(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file (defaults to .memories/export.json or .memories/export.md)",
        ),
    ] = None,
    fmt: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = ExportFormat.json,
    all_stores: Annotated[
        bool,
        typer.Option("--all", help="Export all stores"),
    ] = False,
) -> None:
    """Export memories as JSON or Markdown."""
    output_path = output or _default_export_path(fmt)

    if fmt is ExportFormat.json:
        args = ["export", "-o", str(output_path)]
        if all_stores:
            args.append("--all")
        _run_scoped(ctx, args)
        success(f"Exported to {output_path}")
        return

    _export_markdown(ctx, output_path, all_stores=all_stores)


@app.command("import")
def import_(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Input file")],
) -> None:
    """Import memories from a file."""
    _run_scoped(ctx, ["import", str(file)])


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Show memory statistics."""
    _run_scoped(ctx, ["stats"])


@app.command("stores")
def stores(ctx: typer.Context) -> None:
    """List available stores."""
    # Listing stores is not scoped to the current repo
    _run_mmry(ctx, ["stores", "list"], repo=None, identity=None)


@app.command("list")
def list_memories(
    ctx: typer.Context,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=0, help="Maximum number of results"),
    ] = None,
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Filter by category"),
    ] = None,
    json_output: JsonOutput = False,
    full: Annotated[
        bool,
        typer.Option("--full", help="Include full embeddings in JSON output"),
    ] = False,
) -> None:
    """List memories."""
    args = ["ls"]
    if limit is not None:
        args.extend(["--limit", str(limit)])
    if category:
        args.extend(["--category", category])
    if json_output:
        args.append("--json")
    if full:
        args.append("--full")
    _run_scoped(ctx, args)


@app.command("remove")
@app.command("rm", hidden=True)
def remove(
    ctx: typer.Context,
    memory_id: Annotated[str, typer.Argument(help="Memory ID to remove")],
) -> None:
    """Remove a memory."""
    _run_scoped(ctx, ["rm", memory_id])
