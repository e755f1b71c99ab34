import difflib
from typing import Optional

from clarity_core.models import (
    BillComparison,
    DiffRun,
    DiffStats,
    SideBySideLine,
    UnifiedLine,
    get_version_label,
)
from clarity_core.parsing.normalizer import prepare_for_diff

# Run kind constants
RUN_UNCHANGED: str = "unchanged"
RUN_ADDED: str = "added"
RUN_REMOVED: str = "removed"


def _split_lines(text: str) -> list[str]:
    # Terminators are kept as written; only an unterminated final line gets "\n"
    lines = text.splitlines(keepends=True)
    if lines and lines[-1].splitlines()[0] == lines[-1]:
        lines[-1] += "\n"
    return lines


def _coalesce(runs: list[DiffRun]) -> list[DiffRun]:
    merged: list[DiffRun] = []
    for run in runs:
        if not run.count:
            continue
        if merged and merged[-1].kind == run.kind:
            previous = merged.pop()
            run = DiffRun(
                value=previous.value + run.value,
                added=run.added,
                removed=run.removed,
                count=previous.count + run.count,
            )
        merged.append(run)
    return merged


def diff_lines(old_text: str, new_text: str) -> list[DiffRun]:
    """
    Line-granularity diff between two texts.

    Lines keep their original terminators ("\\r\\n", form feed, ...), so
    a line that differs only in its line ending counts as changed. A final
    line without a terminator is compared as if it ended in "\\n", so
    "a\\nb" and "a\\nb\\n" are identical. A replaced block yields its
    removed run before its added run.

    Matching comes from difflib.SequenceMatcher (Ratcliff-Obershelp), which
    finds the longest matching blocks first. The result is a valid edit
    script but not guaranteed to be the shortest one.

    Args:
        old_text: Original text
        new_text: Compared text

    Returns:
        Ordered runs; dropping added runs rebuilds old_text, dropping
        removed runs rebuilds new_text (each with a final newline)
    """
    old_lines = _split_lines(old_text)
    new_lines = _split_lines(new_text)

    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    runs: list[DiffRun] = []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            runs.append(DiffRun("".join(old_lines[i1:i2]), count=i2 - i1))
            continue
        if tag in ("delete", "replace"):
            runs.append(DiffRun("".join(old_lines[i1:i2]), removed=True, count=i2 - i1))
        if tag in ("insert", "replace"):
            runs.append(DiffRun("".join(new_lines[j1:j2]), added=True, count=j2 - j1))

    return _coalesce(runs)


def summarize_diff(runs: list[DiffRun]) -> DiffStats:
    """
    Count non-empty lines per change category.

    Args:
        runs: Output of diff_lines

    Returns:
        DiffStats with additions, deletions, unchanged
    """
    stats = DiffStats()
    for run in runs:
        non_empty = sum(1 for line in run.lines() if line)
        if run.added:
            stats.additions += non_empty
        elif run.removed:
            stats.deletions += non_empty
        else:
            stats.unchanged += non_empty
    return stats


def to_side_by_side(runs: list[DiffRun]) -> tuple[list[SideBySideLine], list[SideBySideLine]]:
    """
    Build left/right line records for a side-by-side view.

    A removed line shows on the left opposite a blank placeholder, an added
    line on the right opposite a placeholder. Each side numbers only the
    lines that exist on that side.

    Returns:
        (left records, right records), always the same length
    """
    left: list[SideBySideLine] = []
    right: list[SideBySideLine] = []
    left_num = 1
    right_num = 1

    for run in runs:
        for line in run.lines():
            if run.removed:
                left.append(SideBySideLine(left_num, line, RUN_REMOVED))
                right.append(SideBySideLine(None, "", "placeholder"))
                left_num += 1
            elif run.added:
                left.append(SideBySideLine(None, "", "placeholder"))
                right.append(SideBySideLine(right_num, line, RUN_ADDED))
                right_num += 1
            else:
                left.append(SideBySideLine(left_num, line, RUN_UNCHANGED))
                right.append(SideBySideLine(right_num, line, RUN_UNCHANGED))
                left_num += 1
                right_num += 1

    return left, right


def to_unified(runs: list[DiffRun]) -> list[UnifiedLine]:
    """Unified view records: "-" / "+" markers, running number for unchanged lines."""
    records: list[UnifiedLine] = []
    line_num = 1

    for run in runs:
        for line in run.lines():
            if run.removed:
                records.append(UnifiedLine("-", line, RUN_REMOVED))
            elif run.added:
                records.append(UnifiedLine("+", line, RUN_ADDED))
            else:
                records.append(UnifiedLine(str(line_num), line, RUN_UNCHANGED))
                line_num += 1

    return records


def compare_bill_texts(
    old_text: str,
    new_text: str,
    version_a: str = "original",
    version_b: str = "compared",
    normalize: bool = True,
    label_a: Optional[str] = None,
    label_b: Optional[str] = None,
) -> BillComparison:
    """
    Compare two bill texts, normalizing them first by default.

    Args:
        old_text: Raw text of the base version
        new_text: Raw text of the compared version
        version_a: Version slot of old_text
        version_b: Version slot of new_text
        normalize: Run prepare_for_diff on both texts before diffing
        label_a: Display label (defaults to the version label)
        label_b: Display label (defaults to the version label)

    Returns:
        BillComparison with runs and statistics
    """
    if normalize:
        old_text = prepare_for_diff(old_text)
        new_text = prepare_for_diff(new_text)

    runs = diff_lines(old_text, new_text)

    return BillComparison(
        version_a=version_a,
        version_b=version_b,
        label_a=label_a or get_version_label(version_a),
        label_b=label_b or get_version_label(version_b),
        runs=runs,
        stats=summarize_diff(runs),
        normalized=normalize,
    )
