"""Repository and workspace detection from git metadata or the working directory."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def _git_output(*args: str) -> str | None:
    """Run a git command and return its stripped stdout, or None on failure."""
    if shutil.which("git") is None:
        return None
    try:
        result = subprocess.run(
            ["git", *args],  # noqa: S607
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.debug("git %s could not be run: %s", " ".join(args), e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def repo_name_from_url(url: str) -> str | None:
    """Extract the repository name from a git remote URL.

    Handles both HTTPS and SSH forms:
        https://github.com/user/repo.git -> repo
        git@github.com:user/repo.git -> repo
    """
    url = url.strip().rstrip("/")
    url = url.removesuffix(".git")
    name = re.split(r"[/:]", url)[-1]
    return name or None


def get_repo_name() -> str | None:
    """Get the current repo name from the git origin remote or the directory name."""
    url = _git_output("remote", "get-url", "origin")
    if url and (name := repo_name_from_url(url)):
        return name
    return _cwd_name()


def _cwd_name() -> str | None:
    try:
        cwd = Path.cwd()
    except OSError:
        return None
    return cwd.name or None


def get_repo_root() -> Path | None:
    """Return the root of the current git working tree, if any."""
    top = _git_output("rev-parse", "--show-toplevel")
    return Path(top) if top else None


def resolve_workspace(
    workspace: str | None,
    *,
    all_workspaces: bool = False,
    session: str | None = None,
) -> str | None:
    """Resolve the workspace scope for a history search.

    An explicit workspace wins, unless all workspaces were requested. A session
    filter is its own scope, so no default is applied. Otherwise fall back to
    the git working tree root, then the current directory.
    """
    if all_workspaces:
        return None
    if workspace:
        return workspace
    if session:
        return None
    if (root := get_repo_root()) is not None:
        return str(root)
    try:
        return str(Path.cwd())
    except OSError:
        return None
