"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import subprocess
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest

from agntz.search.models import SearchHit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


@pytest.fixture
def now() -> datetime:
    """A fixed clock for recency tests."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_hit() -> Callable[..., SearchHit]:
    """Build a SearchHit with sensible defaults for all required fields."""

    def _make(**overrides: Any) -> SearchHit:
        fields: dict[str, Any] = {
            "message_id": "m1",
            "conversation_id": "c1",
            "message_idx": 0,
            "role": "user",
            "content": "full content",
            "snippet": "a snippet",
            "conv_created_at": datetime(2025, 1, 1, tzinfo=UTC),
            "score": 1.0,
            "source_id": "s1",
            "source_adapter": "claude-code",
        }
        fields.update(overrides)
        return SearchHit(**fields)

    return _make


@pytest.fixture
def completed() -> Callable[..., subprocess.CompletedProcess[str]]:
    """Build a CompletedProcess as returned by subprocess.run."""

    def _make(
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def in_tmp_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory named like a repo."""
    repo = tmp_path / "myrepo"
    repo.mkdir()
    monkeypatch.chdir(repo)
    for var in ("PI_HARNESS", "OPENCODE", "AGENT_HARNESS"):
        monkeypatch.delenv(var, raising=False)
    return repo
