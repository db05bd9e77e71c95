"""agntz - Agent utility toolkit for AI coding agents."""

from __future__ import annotations

__version__ = "0.3.0"
