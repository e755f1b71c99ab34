import logging
import os
from pathlib import Path
from typing import Any, Optional

import httpx
from dotenv import load_dotenv
from google import genai
from openai import OpenAI
from rich.console import Console
from rich.markup import escape

from clarity_core.analysis import compare_bill_texts, summarize_section, summarize_text
from clarity_core.api import fetch_bill_texts
from clarity_core.config import get_api_keys
from clarity_core.exceptions import ConfigError
from clarity_core.models import (
    BILL_VERSIONS,
    BillComparison,
    ExportOptions,
    ParsedBill,
    SearchResult,
    SummaryResult,
    get_version_label,
)
from clarity_core.parsing import parse_bill, search_bill
from clarity_core.reports import (
    build_export_filename,
    display_comparison,
    display_search_results,
    display_section_tree,
    display_summary,
    export_comparison,
    save_export,
)
from clarity_core.utils import get_cost_summary

load_dotenv()
console = Console()
logger = logging.getLogger(__name__)

COMPARISON_VIEWS: tuple[str, ...] = ("side-by-side", "unified", "none")


def _init_llm_clients() -> tuple[Optional[Any], Optional[Any]]:
    # Only build clients whose key is present; summaries report the missing client
    keys = get_api_keys()
    openai_client = OpenAI(api_key=keys["openai"]) if keys["openai"] else None
    gemini_client = None
    if keys["google"]:
        os.environ["GOOGLE_GENAI_DISABLE_NON_TEXT_WARNINGS"] = "true"
        gemini_client = genai.Client(api_key=keys["google"])
    return openai_client, gemini_client


def _check_version(version: str) -> None:
    if version not in BILL_VERSIONS:
        raise ConfigError(f"Unknown bill version '{version}'. Choose from: {', '.join(BILL_VERSIONS)}")


def load_bills(
    config: dict[str, Any],
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> dict[str, ParsedBill]:
    """
    Load every bill version and parse it.

    Parsing starts only after all documents are loaded; a load failure
    propagates as BillLoadError.

    Args:
        config: Configuration dictionary
        transport: Optional httpx transport override for the fetch layer

    Returns:
        Mapping of version slot to ParsedBill
    """
    texts = fetch_bill_texts(config, transport=transport)
    bills = {version: parse_bill(text, version=version) for version, text in texts.items()}
    for version, bill in bills.items():
        logger.debug("Parsed %s: %d sections, date=%r", version, bill.section_count, bill.date)
    return bills


def compare_versions(
    bills: dict[str, ParsedBill],
    version_a: str,
    version_b: str,
    normalize: bool = True
) -> BillComparison:
    """
    Diff two loaded bill versions.

    Raises:
        ConfigError: If either version slot is unknown or not loaded
    """
    for version in (version_a, version_b):
        _check_version(version)
        if version not in bills:
            raise ConfigError(f"Bill version '{version}' is not loaded")

    return compare_bill_texts(
        bills[version_a].raw_text,
        bills[version_b].raw_text,
        version_a=version_a,
        version_b=version_b,
        normalize=normalize,
    )


def run_comparison(
    config: dict[str, Any],
    version_a: Optional[str] = None,
    version_b: Optional[str] = None,
    view: str = "side-by-side",
    export_format: Optional[str] = None,
    output_dir: Optional[str] = None,
    max_lines: Optional[int] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> tuple[BillComparison, Optional[Path]]:
    """
    Load, compare, display and optionally export two bill versions.

    Args:
        config: Configuration dictionary
        version_a: Base version slot (default: comparison.default_pair[0])
        version_b: Compared version slot (default: comparison.default_pair[1])
        view: "side-by-side", "unified" or "none"
        export_format: "html" or "markdown"; None skips the export
        output_dir: Export directory (default: export.output_dir)
        max_lines: Limit on displayed diff rows
        transport: Optional httpx transport override

    Returns:
        (comparison, path of the exported report or None)
    """
    if view not in COMPARISON_VIEWS:
        raise ConfigError(f"Unknown view '{view}'. Choose from: {', '.join(COMPARISON_VIEWS)}")

    default_a, default_b = config["comparison"]["default_pair"]
    version_a = version_a or default_a
    version_b = version_b or default_b
    _check_version(version_a)
    _check_version(version_b)

    bills = load_bills(config, transport=transport)
    normalize = config["comparison"].get("normalize", True)
    comparison = compare_versions(bills, version_a, version_b, normalize=normalize)

    if view != "none":
        display_comparison(comparison, view=view, max_lines=max_lines)

    export_path = None
    if export_format:
        export_config = config["export"]
        try:
            options = ExportOptions(
                format=export_format,
                include_highlights=export_config.get("include_highlights", True),
                include_line_numbers=export_config.get("include_line_numbers", True),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid export options: {e}") from e

        # Exports diff the raw documents, as downloaded
        content = export_comparison(
            bills[version_a].raw_text,
            bills[version_b].raw_text,
            comparison.label_a,
            comparison.label_b,
            options,
        )
        filename = build_export_filename(version_a, version_b, options.format)
        export_path = save_export(content, filename, output_dir or export_config.get("output_dir", "."))

    return comparison, export_path


def browse_bill(
    config: dict[str, Any],
    version: str,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> ParsedBill:
    """Load all versions and show the section tree of one."""
    _check_version(version)
    bills = load_bills(config, transport=transport)
    bill = bills[version]
    console.print(f"\n[bold cyan]{get_version_label(version)}[/bold cyan]")
    display_section_tree(bill)
    return bill


def search_bills(
    config: dict[str, Any],
    query: str,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> dict[str, list[SearchResult]]:
    """
    Search every loaded version for a literal query.

    Returns:
        Mapping of version slot to matches, in document order
    """
    bills = load_bills(config, transport=transport)
    results = {version: search_bill(bill.raw_text, query) for version, bill in bills.items()}

    if not any(results.values()):
        console.print(f"[yellow]⚠ No matches for '{escape(query)}'[/yellow]")
    display_search_results(results, query)
    return results


def summarize_bill_section(
    config: dict[str, Any],
    version: str,
    section_number: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> SummaryResult:
    """
    Generate an AI summary of one section, or of the whole document when no
    section number is given.

    Raises:
        ConfigError: If the version is unknown or the section does not exist
    """
    _check_version(version)
    bills = load_bills(config, transport=transport)
    bill = bills[version]
    openai_client, gemini_client = _init_llm_clients()

    if section_number:
        section = bill.find_section(section_number)
        if section is None:
            raise ConfigError(f"Section '{section_number}' not found in {get_version_label(version)}")
        console.print(f"\n[cyan]Summarizing {escape(section.label)}...[/cyan]")
        result = summarize_section(section, config, gemini_client, openai_client)
        heading = section.label
    else:
        console.print(f"\n[cyan]Summarizing {get_version_label(version)}...[/cyan]")
        result = summarize_text(bill.raw_text, config, gemini_client, openai_client)
        heading = get_version_label(version)

    display_summary(heading, result)

    if result.ok:
        costs = get_cost_summary()
        console.print(f"[dim]LLM cost: ${costs['estimated_cost_usd']:.4f} ({costs['total_calls']} calls)[/dim]")
    return result
