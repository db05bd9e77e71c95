"""Tests for the mail and file reservation commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from agntz.cli import app

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})


@pytest.fixture
def mailz(completed: Callable, in_tmp_repo: Path) -> Any:
    """Patch subprocess.run for mailz calls."""
    with patch("agntz.core.process.subprocess.run", return_value=completed()) as mock_run:
        yield mock_run


@pytest.mark.parametrize(
    ("cli_args", "expected"),
    [
        (["mail", "inbox"], ["inbox"]),
        (["mail", "send", "bob", "hello"], ["send", "bob", "hello"]),
        (["mail", "send", "bob", "hello", "-b", "hi there"], ["send", "bob", "hello", "--body", "hi there"]),
        (["mail", "read", "42"], ["read", "42"]),
        (["mail", "ack", "42"], ["ack", "42"]),
        (["mail", "search", "deploy"], ["search", "deploy"]),
        (["reservations"], ["reservations"]),
        (["release", "--all"], ["release", "--all"]),
        (["release", "a.py", "b.py"], ["release", "a.py", "b.py"]),
    ],
)
def test_mailz_argv(mailz: Any, cli_args: list[str], expected: list[str]) -> None:
    """Each command maps to the matching mailz invocation."""
    result = runner.invoke(app, cli_args)
    assert result.exit_code == 0, result.output
    assert mailz.call_args.args[0] == ["mailz-cli", *expected]


def test_reserve_defaults(mailz: Any) -> None:
    """reserve passes the default TTL."""
    result = runner.invoke(app, ["reserve", "src/main.py"])
    assert result.exit_code == 0, result.output
    assert mailz.call_args.args[0] == ["mailz-cli", "reserve", "src/main.py", "--ttl", "1800"]


def test_reserve_with_reason(mailz: Any) -> None:
    """reserve forwards TTL and reason."""
    result = runner.invoke(app, ["reserve", "a.py", "b.py", "--ttl", "60", "-r", "refactor"])
    assert result.exit_code == 0, result.output
    assert mailz.call_args.args[0] == [
        "mailz-cli",
        "reserve",
        "a.py",
        "b.py",
        "--ttl",
        "60",
        "--reason",
        "refactor",
    ]


def test_release_requires_files_or_all(mailz: Any) -> None:
    """release without files or --all is an error and runs nothing."""
    result = runner.invoke(app, ["release"])
    assert result.exit_code == 1
    assert "Specify files to release, or use --all" in result.output
    mailz.assert_not_called()


def test_mailz_missing(in_tmp_repo: Path) -> None:
    """A missing binary suggests installing it."""
    with patch("agntz.core.process.subprocess.run", side_effect=FileNotFoundError):
        result = runner.invoke(app, ["mail", "inbox"])
    assert result.exit_code == 1
    assert "is mailz installed?" in result.output
