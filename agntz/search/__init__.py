"""Session-history search: fetching, filtering and rendering hits."""

from __future__ import annotations

from agntz.search.client import search_history
from agntz.search.filters import fetch_limit, filter_hits, truncate_hits
from agntz.search.models import SearchHit, SearchResponse
from agntz.search.render import render_compact, render_json

__all__ = [
    "SearchHit",
    "SearchResponse",
    "fetch_limit",
    "filter_hits",
    "render_compact",
    "render_json",
    "search_history",
    "truncate_hits",
]
