"""Tests for invoking the history-search tool and parsing its response."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from agntz.core.errors import ExternalToolError, InvalidResponseError, ToolNotFoundError
from agntz.search.client import build_search_args, parse_search_response, search_history

if TYPE_CHECKING:
    from collections.abc import Callable

HIT = {
    "message_id": "m1",
    "conversation_id": "c1",
    "message_idx": 2,
    "role": "assistant",
    "content": "the content",
    "snippet": "the <b>content</b>",
    "created_at": "2025-05-30T10:00:00Z",
    "conv_created_at": "2025-05-01T09:00:00+02:00",
    "conv_updated_at": None,
    "score": 3.5,
    "source_id": "local",
    "source_adapter": "pi",
    "source_path": "/sessions/c1.jsonl",
    "host": None,
    "external_id": "ext",
    "title": "Fix the bug",
    "workspace": "/home/u/agntz",
}


class TestBuildSearchArgs:
    """Tests for build_search_args."""

    def test_minimal(self) -> None:
        """Query, JSON output and limit are always passed."""
        assert build_search_args("auth bug", limit=20) == [
            "search",
            "auth bug",
            "--json",
            "--limit",
            "20",
        ]

    def test_all_options(self) -> None:
        """Every option maps to its flag."""
        args = build_search_args(
            "q",
            limit=5,
            workspace="/repo",
            no_dedup=True,
            include_tools=True,
            include_system=True,
        )
        assert args == [
            "search",
            "q",
            "--json",
            "--limit",
            "5",
            "--workspace",
            "/repo",
            "--no-dedup",
            "--include-tools",
            "--include-system",
        ]


class TestParseSearchResponse:
    """Tests for parse_search_response."""

    def test_ok(self) -> None:
        """Hits are parsed in order with typed fields."""
        second = {**HIT, "message_id": "m2"}
        hits = parse_search_response(json.dumps({"ok": True, "result": [HIT, second], "error": None}))
        assert [h.message_id for h in hits] == ["m1", "m2"]
        assert hits[0].message_idx == 2
        assert hits[0].conv_created_at.utcoffset() is not None

    def test_null_result(self) -> None:
        """ok with a null result means no hits."""
        assert parse_search_response('{"ok": true, "result": null, "error": null}') == []

    def test_not_ok_with_error(self) -> None:
        """ok: false surfaces the tool's error message."""
        with pytest.raises(ExternalToolError, match="index not found"):
            parse_search_response('{"ok": false, "result": null, "error": "index not found"}')

    def test_not_ok_without_error(self) -> None:
        """ok: false without a message gets a generic one."""
        with pytest.raises(ExternalToolError, match="search failed"):
            parse_search_response('{"ok": false}')

    @pytest.mark.parametrize(
        "stdout",
        [
            "",
            "not json",
            "[]",
            '{"result": []}',
            '{"ok": true, "result": [{"message_id": "m1"}]}',
        ],
    )
    def test_invalid(self, stdout: str) -> None:
        """Anything that does not match the schema is an invalid response."""
        with pytest.raises(InvalidResponseError, match="Invalid response format"):
            parse_search_response(stdout)

    def test_one_bad_hit_fails_everything(self) -> None:
        """No partial results are salvaged from a malformed response."""
        bad = {**HIT, "score": "high"}
        with pytest.raises(InvalidResponseError):
            parse_search_response(json.dumps({"ok": True, "result": [HIT, bad]}))


class TestSearchHistory:
    """Tests for search_history."""

    def test_runs_binary(self, completed: Callable) -> None:
        """The configured binary is called with the translated arguments."""
        stdout = json.dumps({"ok": True, "result": [HIT], "error": None})
        with patch(
            "agntz.core.process.subprocess.run",
            return_value=completed(stdout=stdout),
        ) as mock_run:
            hits = search_history("/opt/hstry", "q", limit=7, workspace="/repo")
        assert mock_run.call_args.args[0] == [
            "/opt/hstry",
            "search",
            "q",
            "--json",
            "--limit",
            "7",
            "--workspace",
            "/repo",
        ]
        assert [h.message_id for h in hits] == ["m1"]

    def test_non_zero_exit_carries_stderr(self, completed: Callable) -> None:
        """A failed run raises with the tool's stderr, regardless of stdout."""
        stdout = json.dumps({"ok": True, "result": [], "error": None})
        with (
            patch(
                "agntz.core.process.subprocess.run",
                return_value=completed(returncode=2, stdout=stdout, stderr="database locked\n"),
            ),
            pytest.raises(ExternalToolError) as exc_info,
        ):
            search_history("hstry", "q", limit=20)
        assert exc_info.value.message == "database locked\n"
        assert str(exc_info.value) == "database locked\n"
        assert exc_info.value.returncode == 2

    def test_missing_binary(self) -> None:
        """A missing binary is reported as such."""
        with (
            patch("agntz.core.process.subprocess.run", side_effect=FileNotFoundError),
            pytest.raises(ToolNotFoundError),
        ):
            search_history("hstry", "q", limit=20)
