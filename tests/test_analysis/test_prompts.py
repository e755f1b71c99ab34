"""
Prompt construction tests.

Tests verify the character budgets applied before text is sent to a model.
"""
from clarity_core.analysis.prompts import (
    DOCUMENT_TEXT_LIMIT,
    SECTION_CONTENT_LIMIT,
    build_document_summary_prompt,
    build_section_summary_prompt,
)
from clarity_core.models import BillSection


def _section(content: str, title: str = "REGISTRATION") -> BillSection:
    return BillSection(
        section_number="SEC. 201",
        title=title,
        content=content,
        line_start=20,
        line_end=21,
        level=1,
        type="section",
    )


class TestSectionPrompt:
    """Tests for build_section_summary_prompt()."""

    def test_short_content_untouched(self):
        prompt, truncated = build_section_summary_prompt(_section("A digital commodity exchange shall register."))

        assert not truncated
        assert "Section: SEC. 201 - REGISTRATION" in prompt
        assert prompt.endswith("Content: A digital commodity exchange shall register.")

    def test_long_content_truncated(self):
        prompt, truncated = build_section_summary_prompt(_section("y" * (SECTION_CONTENT_LIMIT + 500)))

        assert truncated
        assert prompt.endswith("y" * SECTION_CONTENT_LIMIT + "...")
        assert "y" * (SECTION_CONTENT_LIMIT + 1) not in prompt

    def test_content_exactly_at_limit(self):
        _, truncated = build_section_summary_prompt(_section("y" * SECTION_CONTENT_LIMIT))
        assert not truncated

    def test_untitled_section(self):
        prompt, _ = build_section_summary_prompt(_section("body", title=""))
        assert "SEC. 201 - (untitled)" in prompt


class TestDocumentPrompt:
    """Tests for build_document_summary_prompt()."""

    def test_bounded_without_suffix(self):
        prompt, truncated = build_document_summary_prompt("z" * (DOCUMENT_TEXT_LIMIT + 1))

        assert truncated
        assert prompt.endswith("z" * DOCUMENT_TEXT_LIMIT)
        assert not prompt.endswith("...")

    def test_short_text(self):
        prompt, truncated = build_document_summary_prompt("SEC. 1. SHORT TITLE.")

        assert not truncated
        assert prompt.startswith("Concisely summarize")
        assert prompt.endswith("SEC. 1. SHORT TITLE.")
