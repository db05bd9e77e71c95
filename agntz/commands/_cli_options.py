"""Shared CLI options for agntz commands."""

from __future__ import annotations

from typing import Annotated

import typer

JsonOutput = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON."),
]
Force = Annotated[
    bool,
    typer.Option("--force", help="Re-run even if already set up."),
]
