"""Tests for Markdown section upsert."""

from __future__ import annotations

from agntz.core.sections import Document, Section, parse_sections, upsert_section

SAMPLE = """# Agent Instructions

Intro text.

## Build

Run make.

## Style

Use ruff.
"""


class TestParseSections:
    """Tests for parse_sections."""

    def test_splits_preamble_and_sections(self) -> None:
        """Top-level headings start sections; text before them is the preamble."""
        doc = parse_sections(SAMPLE)
        assert doc.preamble == "# Agent Instructions\n\nIntro text.\n\n"
        assert [s.heading for s in doc.sections] == ["## Build", "## Style"]
        assert doc.sections[0].body == "\nRun make.\n\n"

    def test_round_trip(self) -> None:
        """Rendering a parsed document gives back the original text."""
        assert parse_sections(SAMPLE).render() == SAMPLE

    def test_ignores_headings_in_code_fences(self) -> None:
        """A ## line inside a fenced block does not start a section."""
        text = "## Notes\n\n```md\n## not a heading\n```\n"
        doc = parse_sections(text)
        assert len(doc.sections) == 1
        assert "## not a heading" in doc.sections[0].body

    def test_subheadings_stay_in_body(self) -> None:
        """### headings belong to the enclosing section."""
        doc = parse_sections("## A\n### A.1\ntext\n")
        assert len(doc.sections) == 1
        assert doc.sections[0].body == "### A.1\ntext\n"

    def test_empty_text(self) -> None:
        """Empty input is an empty document."""
        doc = parse_sections("")
        assert doc.preamble == ""
        assert doc.sections == []

    def test_find(self) -> None:
        """Sections are found by heading text, ignoring surrounding whitespace."""
        doc = parse_sections(SAMPLE)
        assert doc.find("## Style") == Section("## Style", "\nUse ruff.\n")
        assert doc.find("## Style  ") is not None
        assert doc.find("## Missing") is None


class TestUpsertSection:
    """Tests for upsert_section."""

    def test_appends_new_section(self) -> None:
        """A missing section is appended after a blank line."""
        doc = upsert_section(parse_sections(SAMPLE), "## agntz", "\nUse agntz.\n")
        text = doc.render()
        assert text.endswith("Use ruff.\n\n## agntz\n\nUse agntz.\n")
        assert text.count("## agntz") == 1

    def test_appends_after_empty_last_section(self) -> None:
        """A trailing heading without a body is still followed by a blank line."""
        doc = upsert_section(parse_sections("# T\n\n## foo"), "## agntz", "\nbody\n")
        assert doc.render() == "# T\n\n## foo\n\n## agntz\n\nbody\n"

    def test_replaces_in_place(self) -> None:
        """An existing section keeps its position when replaced."""
        doc = upsert_section(parse_sections(SAMPLE), "## Build", "\nRun just.\n")
        text = doc.render()
        assert "Run make." not in text
        assert text.index("## Build") < text.index("## Style")
        assert "## Build\n\nRun just.\n\n## Style" in text

    def test_idempotent(self) -> None:
        """Applying the same upsert twice gives the same document."""
        once = upsert_section(parse_sections(SAMPLE), "## agntz", "\nUse agntz.\n").render()
        twice = upsert_section(parse_sections(once), "## agntz", "\nUse agntz.\n").render()
        assert once == twice
        assert twice.count("## agntz") == 1

    def test_into_empty_document(self) -> None:
        """Upserting into a document with only a preamble separates them."""
        doc = upsert_section(Document(preamble="# Title\n"), "## agntz", "\nbody\n")
        assert doc.render() == "# Title\n\n## agntz\n\nbody\n"

    def test_does_not_mutate_input(self) -> None:
        """The original document is left untouched."""
        original = parse_sections(SAMPLE)
        upsert_section(original, "## Build", "\nchanged\n")
        assert original.render() == SAMPLE
