"""Detect the coding agent harness that is running agntz."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agntz import constants

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class AgentIdentity:
    """Agent identity detected from environment variables."""

    harness: str
    session: str | None = None
    model: str | None = None


def _non_empty(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    return value or None


def detect_agent(environ: Mapping[str, str]) -> AgentIdentity | None:
    """Detect the agent harness from env vars set by the harness itself.

    Pi (via its bridge extension) sets ``PI_HARNESS``, ``PI_SESSION_ID`` and
    ``PI_MODEL``. opencode sets ``OPENCODE``. Any other harness can set
    ``AGENT_HARNESS``, ``AGENT_SESSION_ID`` and ``AGENT_MODEL``.
    """
    if "PI_HARNESS" in environ:
        return AgentIdentity(
            harness=environ["PI_HARNESS"],
            session=_non_empty(environ, "PI_SESSION_ID"),
            model=_non_empty(environ, "PI_MODEL"),
        )

    if "OPENCODE" in environ:
        return AgentIdentity(harness="opencode")

    if "AGENT_HARNESS" in environ:
        return AgentIdentity(
            harness=environ["AGENT_HARNESS"],
            session=_non_empty(environ, "AGENT_SESSION_ID"),
            model=_non_empty(environ, "AGENT_MODEL"),
        )

    return None


def identity_env(identity: AgentIdentity | None, repo: str | None) -> dict[str, str]:
    """Build the environment mmry reads for memory attribution."""
    if identity is None:
        return {}

    env = {
        "MMRY_AGENT": identity.harness,
        "MMRY_AGENT_KIND": constants.MEMORY_AGENT_KIND,
    }
    meta = {
        key: value
        for key, value in (
            ("repo", repo),
            ("session", identity.session),
            ("model", identity.model),
        )
        if value
    }
    if meta:
        env["MMRY_AGENT_META"] = json.dumps(meta)
    return env
