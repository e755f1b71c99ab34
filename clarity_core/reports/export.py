from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from clarity_core.analysis.changes import diff_lines
from clarity_core.models import ExportOptions
from clarity_core.parsing.normalizer import prepare_for_diff
from clarity_core.reports.html import generate_html_report
from clarity_core.reports.markdown import generate_markdown_report
from clarity_core.utils import epoch_millis

console = Console()

FILE_EXTENSIONS: dict[str, str] = {"html": "html", "markdown": "md"}


def export_comparison(
    original_text: str,
    compared_text: str,
    original_label: str,
    compared_label: str,
    options: Optional[ExportOptions] = None,
    generated_on: Optional[date] = None
) -> str:
    """
    Diff two texts and serialize the comparison as a standalone document.

    Args:
        original_text: Base text
        compared_text: Compared text
        original_label: Display label of the base text
        compared_label: Display label of the compared text
        options: Export options (default: HTML with line numbers)
        generated_on: Report date (default: today)

    Returns:
        HTML or Markdown document
    """
    options = options or ExportOptions()
    if options.normalize:
        original_text = prepare_for_diff(original_text)
        compared_text = prepare_for_diff(compared_text)

    runs = diff_lines(original_text, compared_text)

    if options.format == "markdown":
        return generate_markdown_report(runs, original_label, compared_label, options, generated_on)
    return generate_html_report(runs, original_label, compared_label, options, generated_on)


def build_export_filename(
    version_a: str,
    version_b: str,
    export_format: str = "html",
    moment: Optional[datetime] = None
) -> str:
    """bill-comparison-<a>-vs-<b>-<epoch ms>.<ext>"""
    extension = FILE_EXTENSIONS.get(export_format, "html")
    return f"bill-comparison-{version_a}-vs-{version_b}-{epoch_millis(moment)}.{extension}"


def save_export(content: str, filename: str, output_dir: str = ".") -> Path:
    """
    Write an exported document to disk.

    Args:
        content: Serialized document
        filename: File name (see build_export_filename)
        output_dir: Target directory, created if missing

    Returns:
        Path of the written file
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    console.print(f"[green]✓ Comparison report saved: {escape(str(path))}[/green]")
    return path
