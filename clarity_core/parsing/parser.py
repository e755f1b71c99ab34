"""
Bill section parser.

Builds the TITLE → SEC. hierarchy of a bill in a single forward pass over
classified lines, plus best-effort metadata (short title, date, version).

Tree building:
- An explicit stack holds the open sections (at most one Title at the bottom)
- TITLE header: closes everything, opens a new top-level Title
- SEC. header: closes back to the enclosing Title, attaches as its child
  (or at top level when no Title is open), opens itself
- Content line: accumulates into the innermost open section
- Blank/artifact line: contributes nothing but stays inside the line range

Sections are accumulated in private builders and frozen into immutable
BillSection objects once the pass is complete.
"""
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from clarity_core.models import BillSection, ParsedBill, detect_version
from clarity_core.parsing.citations import extract_citations_from_lines
from clarity_core.parsing.classifier import ClassifiedLine, LineKind, classify_lines

DEFAULT_BILL_TITLE = "Digital Asset Market Clarity Act of 2025"

SHORT_TITLE_PATTERN = re.compile(r'may be cited as the\s+["“]([^"”]+)["”]')
BILL_DATE_PATTERN = re.compile(r"(\w+ \d+, \d{4}) \([\d:]+ [ap]\.m\.\)")


@dataclass
class _OpenSection:
    header: ClassifiedLine
    level: int
    type: str
    content_lines: list[str] = field(default_factory=list)
    citation_lines: list[str] = field(default_factory=list)
    children: list["_OpenSection"] = field(default_factory=list)
    line_end: int = 0

    def freeze(self) -> BillSection:
        return BillSection(
            section_number=self.header.section_number or "",
            title=self.header.heading,
            content="\n".join(self.content_lines),
            line_start=self.header.line_number,
            line_end=self.line_end or self.header.line_number,
            level=self.level,
            type=self.type,
            subsections=tuple(child.freeze() for child in self.children),
            citations=tuple(extract_citations_from_lines(self.citation_lines)),
        )


class SectionTreeBuilder:
    """Fold a classified line stream into a section tree."""

    def __init__(self):
        self.roots: list[_OpenSection] = []
        self.stack: list[_OpenSection] = []
        self.last_line = 0

    def _close_until(self, keep: int, boundary: int) -> None:
        # Sections closed at a header end on the line before it
        while len(self.stack) > keep:
            self.stack.pop().line_end = boundary - 1

    def feed(self, line: ClassifiedLine) -> None:
        self.last_line = line.line_number

        if line.kind is LineKind.TITLE:
            self._close_until(0, line.line_number)
            title = _OpenSection(header=line, level=0, type="title", citation_lines=[line.text])
            self.roots.append(title)
            self.stack.append(title)
            return

        if line.kind is LineKind.SECTION:
            has_title = bool(self.stack) and self.stack[0].type == "title"
            self._close_until(1 if has_title else 0, line.line_number)
            section = _OpenSection(header=line, level=1, type="section", citation_lines=[line.text])
            if has_title:
                self.stack[0].children.append(section)
            else:
                self.roots.append(section)
            self.stack.append(section)
            return

        if line.kind is LineKind.CONTENT and self.stack:
            current = self.stack[-1]
            current.content_lines.append(line.text)
            current.citation_lines.append(line.text)

    def build(self) -> tuple[BillSection, ...]:
        self._close_until(0, self.last_line + 1)
        return tuple(root.freeze() for root in self.roots)


def build_section_tree(lines: Iterable[ClassifiedLine]) -> tuple[BillSection, ...]:
    """
    Build the section hierarchy from classified lines.

    Args:
        lines: Classified lines in document order

    Returns:
        Top-level sections (Titles and ungrouped Sections) in document order
    """
    builder = SectionTreeBuilder()
    for line in lines:
        builder.feed(line)
    return builder.build()


def extract_short_title(raw_text: str) -> str:
    match = SHORT_TITLE_PATTERN.search(raw_text)
    return match.group(1).strip() if match else DEFAULT_BILL_TITLE


def extract_bill_date(raw_text: str) -> str:
    """First "<Month> <Day>, <Year> (<time> a.m.)" stamp, date part only; "" if none."""
    match = BILL_DATE_PATTERN.search(raw_text)
    return match.group(1) if match else ""


def parse_bill(raw_text: str, version: Optional[str] = None) -> ParsedBill:
    """
    Parse raw bill text into metadata and a section tree.

    Never raises: text without recognizable headers yields an empty
    section tree and default metadata.

    Args:
        raw_text: Unmodified bill text
        version: Override for the detected version slot

    Returns:
        ParsedBill owning a freshly built section tree
    """
    return ParsedBill(
        title=extract_short_title(raw_text),
        version=version or detect_version(raw_text),
        date=extract_bill_date(raw_text),
        sections=build_section_tree(classify_lines(raw_text)),
        raw_text=raw_text,
    )
