#!/usr/bin/env python3
# compare_bills.py
"""
CLI for comparing versions of the CLARITY Act bill text.

Usage:
    python compare_bills.py compare --from original --to hfsc --export
    python compare_bills.py browse --version hag
    python compare_bills.py search "digital commodity"
    python compare_bills.py summarize --version hfsc --section "SEC. 103"

Output:
    - Console diff (side-by-side or unified) with change statistics
    - Section tree, search matches, AI summaries
    - Standalone HTML / Markdown comparison report when exporting

Design:
    - Every command loads all three versions first (load failure aborts)
    - Comparison normalizes the texts; exports diff the raw documents
"""
import argparse
import logging
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from clarity_core.config import load_config
from clarity_core.exceptions import BillLoadError, ConfigError
from clarity_core.models import BILL_VERSIONS
from clarity_core.orchestrator import (
    COMPARISON_VIEWS,
    browse_bill,
    run_comparison,
    search_bills,
    summarize_bill_section,
)

load_dotenv()
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare CLARITY Act bill versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python compare_bills.py compare --from original --to hag --view unified
    python compare_bills.py compare --export --format markdown --output-dir reports
    python compare_bills.py search "SEC. 4"
        """
    )
    parser.add_argument("--config", default="config.yaml",
                        help="Path to config file (default: config.yaml)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Diff two bill versions")
    compare.add_argument("--from", dest="version_a", choices=BILL_VERSIONS,
                         help="Base version (default: comparison.default_pair)")
    compare.add_argument("--to", dest="version_b", choices=BILL_VERSIONS,
                         help="Compared version (default: comparison.default_pair)")
    compare.add_argument("--view", choices=COMPARISON_VIEWS, default="side-by-side")
    compare.add_argument("--max-lines", type=int, default=None, help="Limit displayed diff rows")
    compare.add_argument("--export", action="store_true", help="Save a standalone comparison report")
    compare.add_argument("--format", dest="export_format", choices=("html", "markdown"), default=None,
                         help="Report format (default: export.format)")
    compare.add_argument("--output-dir", default=None, help="Report directory (default: export.output_dir)")

    browse = subparsers.add_parser("browse", help="Show the section tree of one version")
    browse.add_argument("--version", choices=BILL_VERSIONS, default="original")

    search = subparsers.add_parser("search", help="Search all versions for a phrase")
    search.add_argument("query", help="Literal text to find (case-insensitive)")

    summarize = subparsers.add_parser("summarize", help="AI summary of a section or whole version")
    summarize.add_argument("--version", choices=BILL_VERSIONS, default="original")
    summarize.add_argument("--section", default=None, help='Section number, e.g. "SEC. 103" or "TITLE II"')

    return parser


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])

    config = load_config(args.config)

    try:
        if args.command == "compare":
            comparison, _ = run_comparison(
                config,
                version_a=args.version_a,
                version_b=args.version_b,
                view=args.view,
                export_format=(args.export_format or config["export"]["format"]) if args.export else None,
                output_dir=args.output_dir,
                max_lines=args.max_lines,
            )
            if not comparison.has_changes:
                console.print("[green]✓ No differences between the selected versions[/green]")
        elif args.command == "browse":
            browse_bill(config, args.version)
        elif args.command == "search":
            if len(args.query.strip()) < 2:
                console.print("[yellow]⚠ Search query must be at least 2 characters[/yellow]")
                sys.exit(1)
            search_bills(config, args.query)
        elif args.command == "summarize":
            result = summarize_bill_section(config, args.version, args.section)
            if not result.ok:
                sys.exit(1)
    except BillLoadError as e:
        console.print(f"[red]Error loading bill texts: {e}[/red]")
        sys.exit(1)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
