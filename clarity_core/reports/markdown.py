import io
import re
from datetime import date
from typing import Optional, TextIO

from clarity_core.analysis.changes import summarize_diff
from clarity_core.models import DiffRun, DiffStats, ExportOptions

BACKTICK_RUN = re.compile(r"`+")


def write_summary_section(f: TextIO, stats: DiffStats) -> None:
    f.write("## Summary\n\n")
    f.write(f"- **Additions:** +{stats.additions} lines\n")
    f.write(f"- **Deletions:** -{stats.deletions} lines\n")
    f.write(f"- **Unchanged:** {stats.unchanged} lines\n\n")


def _fence_for(runs: list[DiffRun]) -> str:
    # Outer fence must be longer than any backtick run inside the block
    longest = max(
        (len(match) for run in runs for match in BACKTICK_RUN.findall(run.value)),
        default=0,
    )
    return "`" * max(3, longest + 1)


def write_diff_block(f: TextIO, runs: list[DiffRun], include_line_numbers: bool = False) -> None:
    """
    Write the full line-by-line diff as a fenced ```diff block.

    The fence grows past the longest backtick run in the bill text so a
    quoted fence inside a line cannot close the block.

    Args:
        f: File handle to write to
        runs: Diff runs in order
        include_line_numbers: Number lines of the compared text (removed lines unnumbered)
    """
    fence = _fence_for(runs)
    f.write(f"## Differences\n\n{fence}diff\n")
    line_num = 1
    for run in runs:
        prefix = "+ " if run.added else "- " if run.removed else "  "
        for line in run.lines():
            if include_line_numbers:
                if run.removed:
                    number = " " * 6
                else:
                    number = f"{line_num:>5} "
                    line_num += 1
                # +/- marker must stay in the first column
                f.write(f"{prefix}{number}{line}\n")
            else:
                f.write(f"{prefix}{line}\n")
    f.write(f"{fence}\n")


def generate_markdown_report(
    runs: list[DiffRun],
    label_a: str,
    label_b: str,
    options: ExportOptions,
    generated_on: Optional[date] = None
) -> str:
    """
    Render a comparison as a standalone Markdown document.

    Args:
        runs: Diff runs between the two texts
        label_a: Label of the base text
        label_b: Label of the compared text
        options: Export options (line numbers)
        generated_on: Report date (default: today)

    Returns:
        Markdown document
    """
    generated_on = generated_on or date.today()
    f = io.StringIO()

    f.write("# Legislative Text Comparison\n\n")
    f.write(f"**{label_a}** → **{label_b}**  \n")
    f.write(f"Generated on {generated_on.strftime('%m/%d/%Y')}\n\n")

    write_summary_section(f, summarize_diff(runs))
    write_diff_block(f, runs, include_line_numbers=options.include_line_numbers)

    return f.getvalue()
