"""
Console display tests.

Tests render into a recording rich Console and inspect the plain text.
"""
import pytest
from rich.console import Console

from clarity_core.analysis.changes import compare_bill_texts
from clarity_core.models import SearchResult, SummaryResult
from clarity_core.parsing.parser import parse_bill
from clarity_core.reports import display


@pytest.fixture
def recording_console(monkeypatch):
    console = Console(record=True, width=160, color_system=None)
    monkeypatch.setattr(display, "console", console)
    return console


class TestComparisonDisplay:
    """Tests for stats panel and diff views."""

    def test_side_by_side(self, recording_console):
        comparison = compare_bill_texts("a\n[b]\n", "a\nc\n", normalize=False)

        display.display_comparison(comparison, view="side-by-side")
        output = recording_console.export_text()

        assert "+1" in output
        assert "-1" in output
        assert "[b]" in output

    def test_unified(self, recording_console):
        comparison = compare_bill_texts("a\nb\n", "a\nc\n", normalize=False)

        display.display_comparison(comparison, view="unified")
        lines = recording_console.export_text().splitlines()

        assert "    - b" in lines
        assert "    + c" in lines

    def test_max_lines(self, recording_console):
        comparison = compare_bill_texts("1a\n2a\n3a\n4a\n", "1a\n2a\n3a\n4a\n", normalize=False)

        display.display_comparison(comparison, view="unified", max_lines=2)

        assert "... 2 more lines" in recording_console.export_text()


class TestSectionTreeDisplay:
    """Tests for the section navigator."""

    def test_tree_lists_sections(self, recording_console, sample_bill_text):
        display.display_section_tree(parse_bill(sample_bill_text))
        output = recording_console.export_text()

        assert "TITLE I  DEFINITIONS" in output
        assert "SEC. 102  RULEMAKING" in output
        assert "7 sections" in output


class TestSearchAndSummaryDisplay:
    """Tests for search results and AI summaries."""

    def test_highlight_text_spans(self):
        text = display.highlight_text("Section 10(b) applies", "10(b)")

        assert text.plain == "Section 10(b) applies"
        assert len(text.spans) == 1

    def test_search_results(self, recording_console):
        results = {
            "original": [SearchResult(21, "A digital commodity exchange", "Section 201: REGISTRATION")],
            "hfsc": [],
        }

        display.display_search_results(results, "digital")
        output = recording_console.export_text()

        assert "1 matches" in output
        assert "A digital commodity exchange" in output

    def test_summary_error_panel(self, recording_console):
        display.display_summary("SEC. 1", SummaryResult(error="AI Insight Error: timeout."))
        assert "AI Insight Error: timeout." in recording_console.export_text()
