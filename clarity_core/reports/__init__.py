from .display import (
    display_comparison,
    display_search_results,
    display_section_tree,
    display_stats,
    display_summary,
)
from .export import build_export_filename, export_comparison, save_export
from .html import generate_html_report
from .markdown import generate_markdown_report

__all__ = [
    "build_export_filename",
    "display_comparison",
    "display_search_results",
    "display_section_tree",
    "display_stats",
    "display_summary",
    "export_comparison",
    "generate_html_report",
    "generate_markdown_report",
    "save_export",
]
