"""Insert or replace named ``## `` sections in a Markdown document."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

_HEADING_PREFIX = "## "
_FENCE = "```"


@dataclass(frozen=True)
class Section:
    """A top-level section: its heading line (without newline) and the text below it."""

    heading: str
    body: str

    @property
    def key(self) -> str:
        return self.heading.strip()


@dataclass(frozen=True)
class Document:
    """A Markdown document split into a preamble and an ordered list of sections."""

    preamble: str = ""
    sections: list[Section] = field(default_factory=list)

    def find(self, heading: str) -> Section | None:
        """Return the section with the given heading, if present."""
        key = heading.strip()
        return next((s for s in self.sections if s.key == key), None)

    def render(self) -> str:
        """Join the document back into text."""
        return self.preamble + "".join(f"{s.heading}\n{s.body}" for s in self.sections)


def parse_sections(text: str) -> Document:
    """Split text on top-level ``## `` headings outside fenced code blocks."""
    preamble: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    in_fence = False

    for line in text.splitlines(keepends=True):
        if line.lstrip().startswith(_FENCE):
            in_fence = not in_fence
        elif not in_fence and line.startswith(_HEADING_PREFIX):
            sections.append((line.rstrip("\r\n"), []))
            continue
        if sections:
            sections[-1][1].append(line)
        else:
            preamble.append(line)

    return Document(
        preamble="".join(preamble),
        sections=[Section(heading, "".join(body)) for heading, body in sections],
    )


def _separated(text: str) -> str:
    """Ensure non-empty text ends with exactly one blank line."""
    stripped = text.rstrip()
    return f"{stripped}\n\n" if stripped else ""


def upsert_section(document: Document, heading: str, body: str) -> Document:
    """Replace the body of the section with ``heading`` or append a new one.

    The section keeps its position when replaced. Applying the same upsert
    twice yields the same document.
    """
    sections = list(document.sections)
    key = heading.strip()
    index = next((i for i, s in enumerate(sections) if s.key == key), None)

    if index is None:
        if sections:
            # A heading with no body still needs a blank line before the next one
            sections[-1] = replace(sections[-1], body=_separated(sections[-1].body) or "\n")
            preamble = document.preamble
        else:
            preamble = _separated(document.preamble)
        sections.append(Section(key, body.rstrip("\n") + "\n"))
        return Document(preamble=preamble, sections=sections)

    new_body = body.rstrip("\n") + "\n"
    if index < len(sections) - 1:
        new_body += "\n"
    sections[index] = Section(sections[index].heading, new_body)
    return Document(preamble=document.preamble, sections=sections)
