"""
Workflow tests.

Tests run the load → parse → compare/search/summarize/export workflows
against bill files on disk, with LLM clients mocked.
"""
import pytest
from unittest.mock import patch

from clarity_core.exceptions import BillLoadError, ConfigError
from clarity_core.orchestrator import (
    browse_bill,
    compare_versions,
    load_bills,
    run_comparison,
    search_bills,
    summarize_bill_section,
)


class TestLoadBills:
    """Tests for load_bills()."""

    def test_parses_every_version(self, bill_files_config):
        bills = load_bills(bill_files_config)

        assert list(bills) == ["original", "hfsc", "hag"]
        assert bills["hfsc"].version == "hfsc"
        assert bills["hfsc"].find_section("SEC. 203") is not None
        assert bills["hag"].find_section("SEC. 102").title == "JOINT RULEMAKING"

    def test_load_failure_stops_before_parsing(self, bill_files_config, tmp_path):
        (tmp_path / "original.txt").unlink()

        with patch("clarity_core.orchestrator.parse_bill") as mock_parse:
            with pytest.raises(BillLoadError):
                load_bills(bill_files_config)

        mock_parse.assert_not_called()


class TestCompareVersions:
    """Tests for compare_versions()."""

    def test_compare_loaded_versions(self, bill_files_config):
        bills = load_bills(bill_files_config)

        comparison = compare_versions(bills, "original", "hag")

        assert comparison.stats.additions == 1
        assert comparison.stats.deletions == 1
        assert comparison.label_b == "HAG Amendment"

    def test_unknown_version(self, bill_files_config):
        bills = load_bills(bill_files_config)

        with pytest.raises(ConfigError):
            compare_versions(bills, "original", "senate")


class TestRunComparison:
    """Tests for run_comparison()."""

    def test_default_pair_and_html_export(self, bill_files_config, tmp_path):
        comparison, path = run_comparison(bill_files_config, view="none", export_format="html")

        assert comparison.version_a == "original"
        assert comparison.version_b == "hfsc"
        assert path.parent == tmp_path / "reports"
        assert path.name.startswith("bill-comparison-original-vs-hfsc-")
        assert path.suffix == ".html"
        html = path.read_text(encoding="utf-8")
        assert "Original Bill" in html
        assert "within 180 days" in html

    def test_markdown_export_to_custom_dir(self, bill_files_config, tmp_path):
        _, path = run_comparison(
            bill_files_config, "hfsc", "hag",
            view="unified", export_format="markdown", output_dir=str(tmp_path / "md"),
        )

        assert path.parent == tmp_path / "md"
        assert "```diff" in path.read_text(encoding="utf-8")

    def test_no_export(self, bill_files_config):
        comparison, path = run_comparison(bill_files_config, view="side-by-side", max_lines=5)

        assert path is None
        assert comparison.has_changes

    def test_invalid_view(self, bill_files_config):
        with pytest.raises(ConfigError):
            run_comparison(bill_files_config, view="split")

    def test_invalid_export_format(self, bill_files_config):
        with pytest.raises(ConfigError):
            run_comparison(bill_files_config, view="none", export_format="pdf")


class TestBrowseAndSearch:
    """Tests for browse_bill() and search_bills()."""

    def test_browse(self, bill_files_config):
        bill = browse_bill(bill_files_config, "hag")
        assert bill.version == "hag"

    def test_search_all_versions(self, bill_files_config):
        results = search_bills(bill_files_config, "within 180 days")

        assert results["original"] == []
        assert len(results["hfsc"]) == 1
        assert results["hfsc"][0].section == "Section 201: REGISTRATION OF EXCHANGES"
        assert results["hag"] == []

    @pytest.mark.parametrize("query", ["[/b]", "[/yellow]", "[bold]x"])
    def test_search_with_markup_like_query(self, bill_files_config, query):
        """Bracketed queries that match nothing are printed literally."""
        results = search_bills(bill_files_config, query)

        assert all(hits == [] for hits in results.values())


class TestSummarizeBillSection:
    """Tests for summarize_bill_section()."""

    @pytest.mark.llm
    def test_section_summary(self, bill_files_config, mock_gemini_client):
        with patch("clarity_core.orchestrator._init_llm_clients", return_value=(None, mock_gemini_client)):
            result = summarize_bill_section(bill_files_config, "original", "sec. 101")

        assert result.ok
        prompt = mock_gemini_client.models.generate_content.call_args.kwargs["contents"]
        assert "SEC. 101 - DEFINITIONS" in prompt

    @pytest.mark.llm
    def test_document_summary(self, bill_files_config, mock_gemini_client):
        with patch("clarity_core.orchestrator._init_llm_clients", return_value=(None, mock_gemini_client)):
            result = summarize_bill_section(bill_files_config, "hfsc")

        assert result.ok

    def test_no_clients_configured(self, bill_files_config):
        with patch("clarity_core.orchestrator._init_llm_clients", return_value=(None, None)):
            result = summarize_bill_section(bill_files_config, "original", "SEC. 1")

        assert not result.ok
        assert "AI Insight unavailable" in result.error

    def test_unknown_section(self, bill_files_config):
        with patch("clarity_core.orchestrator._init_llm_clients", return_value=(None, None)):
            with pytest.raises(ConfigError):
                summarize_bill_section(bill_files_config, "original", "SEC. 999")
