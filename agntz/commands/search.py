"""Search agent session history."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from agntz import constants
from agntz.cli import app, get_settings
from agntz.commands._cli_options import JsonOutput  # noqa: TC001
from agntz.commands._output import tool_errors
from agntz.core.repo import resolve_workspace
from agntz.search import (
    fetch_limit,
    filter_hits,
    render_compact,
    render_json,
    search_history,
    truncate_hits,
)

logger = logging.getLogger(__name__)


@app.command("search", rich_help_panel="History")
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query")],
    workspace: Annotated[
        str | None,
        typer.Option(
            "--workspace",
            "-w",
            help="Limit to a workspace. Defaults to the current git repo root or directory",
        ),
    ] = None,
    days: Annotated[
        int | None,
        typer.Option("--days", min=0, help="Limit to hits from the last N days"),
    ] = None,
    session: Annotated[
        str | None,
        typer.Option(
            "--session",
            "-s",
            help="Limit to one session (conversation id, external id or source path fragment)",
        ),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=0, help="Maximum number of results"),
    ] = constants.DEFAULT_SEARCH_LIMIT,
    no_dedup: Annotated[
        bool,
        typer.Option("--no-dedup", help="Keep duplicate messages"),
    ] = False,
    all_workspaces: Annotated[
        bool,
        typer.Option("--all-workspaces", "-a", help="Search all workspaces"),
    ] = False,
    include_tools: Annotated[
        bool,
        typer.Option("--include-tools", help="Include tool calls and results"),
    ] = False,
    include_system: Annotated[
        bool,
        typer.Option("--include-system", help="Include system context messages"),
    ] = False,
    json_output: JsonOutput = False,
) -> None:
    """Search agent session history.

    Results are scoped to the current repository unless `--workspace`,
    `--session` or `--all-workspaces` is given. The `--session` and `--days`
    filters are applied to the returned hits.
    """
    settings = get_settings(ctx)
    scope = resolve_workspace(workspace, all_workspaces=all_workspaces, session=session)
    logger.debug("Searching %r in workspace %s", query, scope or "<all>")

    with tool_errors():
        hits = search_history(
            settings.binaries.search,
            query,
            limit=fetch_limit(limit, session),
            workspace=scope,
            no_dedup=no_dedup,
            include_tools=include_tools,
            include_system=include_system,
        )

    hits = truncate_hits(filter_hits(hits, session=session, days=days), limit)
    print(render_json(hits) if json_output else render_compact(hits))
