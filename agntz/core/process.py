"""Subprocess helpers for invoking the wrapped tools."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from typing import TYPE_CHECKING

from agntz.core.errors import ExternalToolError, ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


def is_installed(binary: str) -> bool:
    """Check if a binary is available on PATH."""
    return shutil.which(binary) is not None


def capture_tool(
    tool: str,
    binary: str,
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a tool and return its captured output without relaying it.

    Raises:
        ToolNotFoundError: If the binary is not found.
        ExternalToolError: If the binary exists but cannot be executed.

    """
    argv = [binary, *args]
    logger.debug("Running: %s", shlex.join(argv))

    run_env = None
    if env:
        run_env = os.environ.copy()
        run_env.update(env)
        logger.debug("With environment: %s", ", ".join(sorted(env)))

    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            env=run_env,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(tool, binary) from None
    except OSError as e:
        raise ExternalToolError(tool, f"failed to run {binary}: {e.strerror or e}") from None

    logger.debug("%s exited with code %d", binary, result.returncode)
    return result


def run_tool(
    tool: str,
    binary: str,
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run a tool, forwarding its stdout and stderr.

    Raises:
        ToolNotFoundError: If the binary cannot be executed.
        ExternalToolError: If the tool exits with a non-zero status.

    """
    result = capture_tool(tool, binary, args, env=env)
    if result.stdout:
        sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)
    if result.returncode != 0:
        raise ExternalToolError(tool, f"{binary} command failed", result.returncode)
