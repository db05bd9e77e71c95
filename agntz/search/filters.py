"""Client-side narrowing of search hits."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from agntz import constants

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agntz.search.models import SearchHit


def matches_session(hit: SearchHit, session: str) -> bool:
    """Check a hit against a session id, alternate id, or source path fragment."""
    if hit.external_id == session or hit.conversation_id == session:
        return True
    return hit.source_path is not None and session in hit.source_path


def filter_hits(
    hits: Sequence[SearchHit],
    session: str | None = None,
    days: int | None = None,
    now: datetime | None = None,
) -> list[SearchHit]:
    """Drop hits outside the session or older than ``days`` days, keeping order."""
    cutoff = None
    if days is not None:
        cutoff = (now or datetime.now(UTC)) - timedelta(days=days)

    return [
        hit
        for hit in hits
        if (session is None or matches_session(hit, session))
        and (cutoff is None or hit.effective_timestamp >= cutoff)
    ]


def truncate_hits(hits: Sequence[SearchHit], limit: int) -> list[SearchHit]:
    """Keep at most the first ``limit`` hits."""
    return list(hits[: max(limit, 0)])


def fetch_limit(limit: int, session: str | None) -> int:
    """Number of rows to request upstream for a given display limit.

    The session filter runs after retrieval, so ask for more rows when one is
    set. The request never drops below ``limit`` itself.
    """
    if session is None:
        return limit
    floor = max(limit, constants.SESSION_FETCH_FLOOR)
    ceiling = max(constants.SESSION_FETCH_CEILING, limit)
    return min(max(limit * constants.SESSION_FETCH_MULTIPLIER, floor), ceiling)
