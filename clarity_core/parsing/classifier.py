"""
Line classifier for bill text.

Turns raw bill text into a stream of tagged lines that the section tree
builder folds over. Keeping recognition in one place means the parser,
search, and any future consumer agree on what a header is.

Header heuristics:
- TITLE: "TITLE II—REGISTRATION" (case-insensitive, em/en dash or hyphen,
  heading may be empty)
- SECTION: "SEC. 103. DEFINITIONS." / "SECTION 1. SHORT TITLE." with an
  optional leading line number from line-numbered PDFs ("12 SEC. 4. ...").
  Case-insensitive ("Sec. 101. Definitions."), so a body line that opens with
  "Section 4 of the Act ..." is also read as a header.

Quoted headers inside amendment text that start a line are indistinguishable
from structural headers and are classified as headers.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from clarity_core.parsing.normalizer import is_artifact_line

TITLE_PATTERN = re.compile(
    r"^TITLE\s+([IVXLCDM]+)\s*[—–-]\s*(.*)$",
    re.IGNORECASE
)

SECTION_PATTERN = re.compile(
    r"^(?:\d+\s+)?SEC(?:TION)?\.?\s*(\d+[A-Z]?)\.?(?:\s+(.*?))?\.?$",
    re.IGNORECASE
)


class LineKind(str, Enum):
    BLANK = "blank"
    ARTIFACT = "artifact"
    TITLE = "title"
    SECTION = "section"
    CONTENT = "content"


@dataclass(frozen=True)
class ClassifiedLine:
    """One source line with its structural role.

    For TITLE/SECTION lines, `number` is the roman numeral or section number
    and `heading` the trailing text; both are empty otherwise.
    """
    line_number: int        # 1-based
    kind: LineKind
    text: str               # stripped line text
    number: str = ""
    heading: str = ""

    @property
    def is_header(self) -> bool:
        return self.kind in (LineKind.TITLE, LineKind.SECTION)

    @property
    def section_number(self) -> Optional[str]:
        if self.kind is LineKind.TITLE:
            return f"TITLE {self.number.upper()}"
        if self.kind is LineKind.SECTION:
            return f"SEC. {self.number}"
        return None


def _clean_heading(heading: Optional[str]) -> str:
    if not heading:
        return ""
    return heading.strip().rstrip(".").strip()


def classify_line(text: str, line_number: int = 1) -> ClassifiedLine:
    """
    Classify a single line of bill text.

    Args:
        text: Raw line (leading/trailing whitespace ignored)
        line_number: 1-based position in the source document

    Returns:
        ClassifiedLine tagged BLANK, ARTIFACT, TITLE, SECTION, or CONTENT
    """
    stripped = text.strip()
    if not stripped:
        return ClassifiedLine(line_number, LineKind.BLANK, stripped)
    if is_artifact_line(stripped):
        return ClassifiedLine(line_number, LineKind.ARTIFACT, stripped)

    title_match = TITLE_PATTERN.match(stripped)
    if title_match:
        return ClassifiedLine(
            line_number,
            LineKind.TITLE,
            stripped,
            number=title_match.group(1),
            heading=_clean_heading(title_match.group(2)),
        )

    section_match = SECTION_PATTERN.match(stripped)
    if section_match:
        return ClassifiedLine(
            line_number,
            LineKind.SECTION,
            stripped,
            number=section_match.group(1).upper(),
            heading=_clean_heading(section_match.group(2)),
        )

    return ClassifiedLine(line_number, LineKind.CONTENT, stripped)


def classify_lines(raw_text: str) -> Iterator[ClassifiedLine]:
    """Classify every line of a document, numbering from 1."""
    for index, line in enumerate(raw_text.splitlines(), start=1):
        yield classify_line(line, index)
