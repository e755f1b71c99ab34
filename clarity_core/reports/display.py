from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from clarity_core.analysis.changes import to_side_by_side, to_unified
from clarity_core.models import BillComparison, BillSection, ParsedBill, SearchResult, SummaryResult
from clarity_core.parsing.search import highlight_spans

console = Console()

LINE_STYLES: dict[str, str] = {
    "added": "green",
    "removed": "red",
    "unchanged": "",
    "placeholder": "dim",
}


def display_stats(comparison: BillComparison) -> None:
    """
    Show the comparison header and statistics in a color-coded panel.

    Color Coding:
        - No changes: GREEN panel border
        - Changes: YELLOW panel border
    """
    stats = comparison.stats
    border = "yellow" if comparison.has_changes else "green"
    lines = [
        f"[cyan]Comparing:[/cyan] {escape(comparison.label_a)} → {escape(comparison.label_b)}",
        f"[cyan]Normalized:[/cyan] {'yes' if comparison.normalized else 'no'}",
        "",
        f"[green]+{stats.additions}[/green] additions   "
        f"[red]-{stats.deletions}[/red] deletions   "
        f"[dim]{stats.unchanged} unchanged[/dim]",
    ]
    console.print(Panel("\n".join(lines), title="Bill Text Comparison", border_style=border))


def _number(value: Optional[int]) -> Text:
    return Text("" if value is None else str(value), style="dim")


def display_side_by_side(comparison: BillComparison, max_lines: Optional[int] = None) -> None:
    left, right = to_side_by_side(comparison.runs)
    table = Table(show_lines=False, expand=True)
    table.add_column("#", justify="right", width=5)
    table.add_column(comparison.label_a, ratio=1)
    table.add_column("#", justify="right", width=5)
    table.add_column(comparison.label_b, ratio=1)

    rows = list(zip(left, right))
    for left_line, right_line in rows[:max_lines]:
        table.add_row(
            _number(left_line.line_number),
            Text(left_line.text, style=LINE_STYLES[left_line.kind]),
            _number(right_line.line_number),
            Text(right_line.text, style=LINE_STYLES[right_line.kind]),
        )
    console.print(table)
    if max_lines is not None and len(rows) > max_lines:
        console.print(f"[dim]... {len(rows) - max_lines} more lines[/dim]")


def display_unified(comparison: BillComparison, max_lines: Optional[int] = None) -> None:
    records = to_unified(comparison.runs)
    for record in records[:max_lines]:
        line = Text(f"{record.marker:>5} ", style="dim")
        line.append(record.text, style=LINE_STYLES[record.kind])
        console.print(line)
    if max_lines is not None and len(records) > max_lines:
        console.print(f"[dim]... {len(records) - max_lines} more lines[/dim]")


def display_comparison(comparison: BillComparison, view: str = "side-by-side", max_lines: Optional[int] = None) -> None:
    display_stats(comparison)
    if view == "unified":
        display_unified(comparison, max_lines)
    elif view == "side-by-side":
        display_side_by_side(comparison, max_lines)


def _add_section(parent: Tree, section: BillSection) -> None:
    label = Text(section.section_number, style="bold cyan" if section.type == "title" else "cyan")
    if section.title:
        label.append(f"  {section.title}", style="white")
    label.append(f"  (lines {section.line_start}-{section.line_end})", style="dim")
    if section.citations:
        label.append(f"  [{len(section.citations)} citations]", style="magenta")
    branch = parent.add(label)
    for child in section.subsections:
        _add_section(branch, child)


def build_section_tree_view(bill: ParsedBill) -> Tree:
    heading = Text(bill.title, style="bold")
    heading.append(f"  [{bill.version}]", style="yellow")
    if bill.date:
        heading.append(f"  {bill.date}", style="dim")
    tree = Tree(heading)
    for section in bill.sections:
        _add_section(tree, section)
    return tree


def display_section_tree(bill: ParsedBill) -> None:
    """Print the section navigator for one bill version."""
    console.print(build_section_tree_view(bill))
    console.print(f"[dim]{bill.section_count} sections[/dim]")


def highlight_text(text: str, query: str) -> Text:
    rendered = Text()
    for segment, matched in highlight_spans(text, query):
        rendered.append(segment, style="bold black on yellow" if matched else "")
    return rendered


def display_search_results(results: dict[str, list[SearchResult]], query: str, max_results: int = 50) -> None:
    total = sum(len(hits) for hits in results.values())
    console.print(f"\n[bold cyan]Search:[/bold cyan] {escape(query)} ({total} matches)")

    for version, hits in results.items():
        if not hits:
            continue
        table = Table(title=f"{version} ({len(hits)})", expand=True)
        table.add_column("Line", justify="right", width=6)
        table.add_column("Section", ratio=1)
        table.add_column("Text", ratio=3)
        for hit in hits[:max_results]:
            table.add_row(str(hit.line_number), Text(hit.section), highlight_text(hit.text, query))
        console.print(table)


def display_summary(heading: str, result: SummaryResult) -> None:
    if result.ok:
        body = Text(result.summary or "")
        if result.truncated:
            body.append("\n\n(source text truncated before sending)", style="dim")
        console.print(Panel(body, title=f"AI-Generated Insight: {escape(heading)}", border_style="cyan"))
    else:
        console.print(Panel(Text(result.error or "No summary available"),
                            title="Error Generating Insight", border_style="red"))
