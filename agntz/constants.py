"""Default configuration settings for the agntz package."""

from __future__ import annotations

# --- Collaborator binaries ---
MEMORY_BINARY = "mmry"
MAIL_BINARY = "mailz-cli"
ISSUES_BINARY = "trx"
SCHEDULE_BINARY = "skdlr"
SEARCH_BINARY = "hstry"

# --- Search ---
DEFAULT_SEARCH_LIMIT = 20
SESSION_FETCH_MULTIPLIER = 10
SESSION_FETCH_FLOOR = 20
SESSION_FETCH_CEILING = 1000
TITLE_WIDTH = 40
SNIPPET_WIDTH = 160
NO_RESULTS = "No results found."

# --- Memory ---
MEMORY_AGENT_KIND = "coding_agent"
MEMORIES_DIR = ".memories"

# --- Reservations ---
DEFAULT_RESERVATION_TTL = 1800

# --- AGENTS.md ---
AGENTS_FILE = "AGENTS.md"
AGENTS_HEADER = "# Agent Instructions"
AGENTS_SECTION_HEADING = "## agntz"
AGENTS_SECTION_BODY = """
Use agntz for memory and coordination:

```bash
agntz memory search "topic"    # Find relevant context
agntz memory add "insight" -c category
agntz memory list
agntz mail inbox               # Check messages
agntz reserve <file>           # Before editing shared files
agntz release <file>           # When done
agntz search "query"           # Search past agent sessions
```
"""
