"""
Standalone HTML comparison report.

The document is self-contained (inline CSS, no external assets) so it can
be saved to disk and opened or printed anywhere. Every piece of bill text
and every label is HTML-escaped.
"""
import html
import io
from datetime import date
from typing import Optional, TextIO

from clarity_core.analysis.changes import summarize_diff
from clarity_core.models import DiffRun, DiffStats, ExportOptions

REPORT_STYLES = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      line-height: 1.6;
      max-width: 1200px;
      margin: 0 auto;
      padding: 20px;
      background: #f5f5f5;
    }
    .header {
      background: #1e293b;
      color: white;
      padding: 20px;
      border-radius: 8px;
      margin-bottom: 20px;
    }
    .comparison-container {
      background: white;
      border-radius: 8px;
      padding: 20px;
      box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    .stats {
      display: flex;
      gap: 20px;
      margin-bottom: 20px;
      padding: 15px;
      background: #f8fafc;
      border-radius: 6px;
    }
    .additions { color: #10b981; font-weight: 600; }
    .deletions { color: #ef4444; font-weight: 600; }
    .unchanged { color: #6b7280; }
    .diff-line {
      font-family: 'Monaco', 'Consolas', monospace;
      font-size: 14px;
      line-height: 1.5;
      padding: 2px 0;
      white-space: pre-wrap;
    }
    .line-number {
      display: inline-block;
      width: 50px;
      text-align: right;
      padding-right: 10px;
      color: #9ca3af;
      user-select: none;
    }
    .added { background-color: #d1fae5; color: #065f46; }
    .removed { background-color: #fee2e2; color: #991b1b; }
    @media print {
      body { background: white; }
      .header { color: black; border: 1px solid #000; }
    }
"""


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' for safe embedding in HTML."""
    return html.escape(text, quote=True)


def write_stats(f: TextIO, stats: DiffStats) -> None:
    f.write('    <div class="stats">\n')
    f.write(f'      <div class="stat additions">+{stats.additions} additions</div>\n')
    f.write(f'      <div class="stat deletions">-{stats.deletions} deletions</div>\n')
    f.write(f'      <div class="stat unchanged">{stats.unchanged} unchanged</div>\n')
    f.write('    </div>\n')


def write_diff_lines(f: TextIO, runs: list[DiffRun], options: ExportOptions) -> None:
    """
    Write one <div> per diff line.

    Line numbers follow the compared text: removed lines get an empty number cell.
    """
    f.write('    <div class="diff-content">\n')
    line_num = 1
    for run in runs:
        if run.added:
            css_class, prefix = "added", "+ "
        elif run.removed:
            css_class, prefix = "removed", "- "
        else:
            css_class, prefix = "", "  "
        if not options.include_highlights:
            css_class = ""

        class_attr = f"diff-line {css_class}".strip()
        for line in run.lines():
            f.write(f'      <div class="{class_attr}">')
            if options.include_line_numbers:
                if run.removed:
                    f.write('<span class="line-number"></span>')
                else:
                    f.write(f'<span class="line-number">{line_num}</span>')
                    line_num += 1
            f.write(f"{prefix}{escape_html(line)}</div>\n")
    f.write('    </div>\n')


def generate_html_report(
    runs: list[DiffRun],
    label_a: str,
    label_b: str,
    options: ExportOptions,
    generated_on: Optional[date] = None
) -> str:
    """
    Render a comparison as a standalone HTML document.

    Args:
        runs: Diff runs between the two texts
        label_a: Label of the base text
        label_b: Label of the compared text
        options: Export options (highlights, line numbers)
        generated_on: Report date (default: today)

    Returns:
        Complete HTML document
    """
    generated_on = generated_on or date.today()
    safe_a = escape_html(label_a)
    safe_b = escape_html(label_b)
    f = io.StringIO()

    f.write("<!DOCTYPE html>\n<html>\n<head>\n")
    f.write('  <meta charset="UTF-8">\n')
    f.write(f"  <title>Bill Comparison: {safe_a} vs {safe_b}</title>\n")
    f.write(f"  <style>{REPORT_STYLES}  </style>\n")
    f.write("</head>\n<body>\n")

    f.write('  <div class="header">\n')
    f.write("    <h1>Legislative Text Comparison</h1>\n")
    f.write(f"    <p>{safe_a} → {safe_b}</p>\n")
    f.write(f"    <p>Generated on {generated_on.strftime('%m/%d/%Y')}</p>\n")
    f.write("  </div>\n")

    f.write('  <div class="comparison-container">\n')
    write_stats(f, summarize_diff(runs))
    write_diff_lines(f, runs, options)
    f.write("  </div>\n")

    f.write("</body>\n</html>\n")
    return f.getvalue()
