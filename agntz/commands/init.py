"""Initialize agntz for the current repository."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from agntz import constants
from agntz.cli import app, get_settings
from agntz.commands._cli_options import Force  # noqa: TC001
from agntz.commands._output import error, info, success, warn
from agntz.core.errors import AgntzError
from agntz.core.process import run_tool
from agntz.core.repo import get_repo_name
from agntz.core.sections import Document, parse_sections, upsert_section

logger = logging.getLogger(__name__)


def update_agents_file(path: Path, *, force: bool) -> str:
    """Insert or refresh the agntz section in an AGENTS.md file.

    Returns a short description of what was done.
    """
    heading = constants.AGENTS_SECTION_HEADING
    body = constants.AGENTS_SECTION_BODY

    if not path.exists():
        document = Document(preamble=f"{constants.AGENTS_HEADER}\n\n")
        path.write_text(upsert_section(document, heading, body).render(), encoding="utf-8")
        return f"Created {path.name} with agntz section"

    document = parse_sections(path.read_text(encoding="utf-8"))
    if document.find(heading) is None:
        path.write_text(upsert_section(document, heading, body).render(), encoding="utf-8")
        return f"Appended agntz section to {path.name}"

    if not force:
        return f"{path.name} already contains agntz section (use --force to update)"

    path.write_text(upsert_section(document, heading, body).render(), encoding="utf-8")
    return f"Updated existing agntz section in {path.name}"


def _step(tool: str, binary: str, args: list[str]) -> bool:
    """Run one best-effort init step; report whether it succeeded."""
    try:
        run_tool(tool, binary, args)
    except AgntzError as e:
        warn(str(e))
        return False
    return True


@app.command("init", rich_help_panel="Setup")
def init(ctx: typer.Context, force: Force = False) -> None:
    """Initialize agntz for the current repo (mmry store, mailz, trx, AGENTS.md)."""
    repo = get_repo_name()
    if repo is None:
        error("Could not determine repo name")

    binaries = get_settings(ctx).binaries
    info(f"Initializing agntz for repo: {repo}")
    force_flag = ["--force"] if force else []

    info("[1/4] Initializing mmry store...")
    ok = _step("mmry", binaries.memory, ["init", "--store", repo, *force_flag])

    info("[2/4] Initializing mailz...")
    ok = _step("mailz", binaries.mail, ["init", *force_flag]) and ok

    info("[3/4] Initializing trx...")
    ok = _step("trx", binaries.issues, ["init", "--prefix", repo]) and ok

    info(f"[4/4] Updating {constants.AGENTS_FILE}...")
    info(update_agents_file(Path(constants.AGENTS_FILE), force=force))

    if not ok:
        error(f"agntz initialized for '{repo}' with errors (see warnings above)")
    success(f"Done! agntz initialized for '{repo}'")
