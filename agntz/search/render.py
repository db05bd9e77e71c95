"""Render search hits as compact text lines or JSON."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from agntz import constants

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agntz.search.models import SearchHit


def compact(text: str, limit: int) -> str:
    """Cut text longer than ``limit`` to ``limit - 3`` characters plus ``...``."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _workspace_name(workspace: str | None) -> str:
    if not workspace:
        return "-"
    return workspace.split("/")[-1]


def format_hit(hit: SearchHit) -> str:
    """Format one hit as a single line."""
    title = compact(hit.title or "Untitled", constants.TITLE_WIDTH)
    snippet = compact(" ".join(hit.snippet.split()), constants.SNIPPET_WIDTH)
    return (
        f"{hit.score:5.2f} {hit.source_id} {hit.role} {hit.session_id} "
        f"#{hit.message_idx} {_workspace_name(hit.workspace)} {title} - {snippet}"
    )


def render_compact(hits: Sequence[SearchHit]) -> str:
    """Render hits one per line, or a notice when there are none."""
    if not hits:
        return constants.NO_RESULTS
    return "\n".join(format_hit(hit) for hit in hits)


def render_json(hits: Sequence[SearchHit]) -> str:
    """Serialize hits as ``{"hits": [...]}`` with indentation."""
    return json.dumps({"hits": [hit.model_dump(mode="json") for hit in hits]}, indent=2)
