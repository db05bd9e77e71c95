"""Invoke the session-history search tool and parse its JSON response."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from agntz.core.errors import ExternalToolError, InvalidResponseError
from agntz.core.process import capture_tool
from agntz.search.models import SearchHit, SearchResponse

logger = logging.getLogger(__name__)

TOOL_NAME = "hstry"


def build_search_args(
    query: str,
    *,
    limit: int,
    workspace: str | None = None,
    no_dedup: bool = False,
    include_tools: bool = False,
    include_system: bool = False,
) -> list[str]:
    """Translate search options into the tool's argument list."""
    args = ["search", query, "--json", "--limit", str(limit)]
    if workspace:
        args.extend(["--workspace", workspace])
    if no_dedup:
        args.append("--no-dedup")
    if include_tools:
        args.append("--include-tools")
    if include_system:
        args.append("--include-system")
    return args


def parse_search_response(stdout: str) -> list[SearchHit]:
    """Parse the tool's JSON envelope into hits.

    Raises:
        InvalidResponseError: If the output does not match the expected schema.
        ExternalToolError: If the response reports ``ok: false``.

    """
    try:
        response = SearchResponse.model_validate_json(stdout)
    except ValidationError as e:
        logger.debug("Could not parse search response: %s", e)
        raise InvalidResponseError(TOOL_NAME, str(e)) from None

    if not response.ok:
        raise ExternalToolError(TOOL_NAME, response.error or "search failed")
    return list(response.result or [])


def search_history(
    binary: str,
    query: str,
    *,
    limit: int,
    workspace: str | None = None,
    no_dedup: bool = False,
    include_tools: bool = False,
    include_system: bool = False,
) -> list[SearchHit]:
    """Run a history search and return the hits in upstream order.

    Raises:
        ToolNotFoundError: If the binary is missing.
        ExternalToolError: If the tool exits non-zero or reports a failure.
        InvalidResponseError: If the output cannot be parsed.

    """
    args = build_search_args(
        query,
        limit=limit,
        workspace=workspace,
        no_dedup=no_dedup,
        include_tools=include_tools,
        include_system=include_system,
    )
    result = capture_tool(TOOL_NAME, binary, args)
    if result.returncode != 0:
        raise ExternalToolError(TOOL_NAME, result.stderr, result.returncode)
    hits = parse_search_response(result.stdout)
    logger.debug("Search returned %d hits", len(hits))
    return hits
