from dataclasses import dataclass, field
from typing import Iterator, Literal, Optional

from pydantic import BaseModel, Field


# =============================================================================
# BILL VERSIONS
# =============================================================================
#
# The viewer tracks one introduced bill and two committee substitutes (ANS):
#
#   Slot        Source document                              XML marker
#   --------    -----------------------------------------    ---------------------
#   original    Introduced bill text                          (none)
#   hfsc        ANS offered in House Financial Services       clarity_ans_fsc.xml
#   hag         ANS offered in House Agriculture              clarity_ans_ag.xml
#
# The XML marker is the source filename the drafting system stamps into the
# text export, so the version can be recovered from the raw text alone.
# =============================================================================

BILL_VERSIONS: tuple[str, ...] = ("original", "hfsc", "hag")

VERSION_LABELS: dict[str, str] = {
    "original": "Original Bill",
    "hfsc": "HFSC Amendment",
    "hag": "HAG Amendment",
}

# Checked in order; the first marker found wins
VERSION_FILE_MARKERS: tuple[tuple[str, str], ...] = (
    ("clarity_ans_ag.xml", "hag"),
    ("clarity_ans_fsc.xml", "hfsc"),
)


def detect_version(raw_text: str) -> str:
    """
    Detect which bill version a raw text export belongs to.

    Args:
        raw_text: Unmodified bill text

    Returns:
        "hag", "hfsc", or "original" when no marker is present
    """
    lowered = raw_text.lower()
    for marker, version in VERSION_FILE_MARKERS:
        if marker in lowered:
            return version
    return "original"


def get_version_label(version: str) -> str:
    return VERSION_LABELS.get(version, version)


# =============================================================================
# SECTION TREE
# =============================================================================

@dataclass(frozen=True)
class BillSection:
    """Single structural unit of a bill (TITLE or SEC.).

    Titles own their Sections through `subsections`. Line offsets are 1-based
    and inclusive; `line_end` is the last line before the next structural
    boundary.
    """
    section_number: str             # "TITLE II" or "SEC. 103"
    title: str                      # Heading text, trailing period stripped
    content: str
    line_start: int
    line_end: int
    level: int                      # 0 title, 1 section, 2 subsection
    type: Literal["title", "section", "subsection"]
    subsections: tuple["BillSection", ...] = ()
    citations: tuple[str, ...] = ()

    def iter_sections(self) -> Iterator["BillSection"]:
        """Yield this section and every descendant, depth-first in document order."""
        yield self
        for child in self.subsections:
            yield from child.iter_sections()

    @property
    def label(self) -> str:
        return f"{self.section_number}: {self.title}" if self.title else self.section_number


@dataclass(frozen=True)
class ParsedBill:
    """Parsed bill: metadata plus its section tree. Owns the tree exclusively."""
    title: str
    version: str
    date: str
    sections: tuple[BillSection, ...]
    raw_text: str

    def iter_sections(self) -> Iterator[BillSection]:
        for section in self.sections:
            yield from section.iter_sections()

    def find_section(self, section_number: str) -> Optional[BillSection]:
        """Look up a section by number ("SEC. 103", "TITLE II"), case-insensitive."""
        wanted = " ".join(section_number.upper().split())
        for section in self.iter_sections():
            if section.section_number.upper() == wanted:
                return section
        return None

    @property
    def section_count(self) -> int:
        return sum(1 for _ in self.iter_sections())


# =============================================================================
# DIFF RECORDS
# =============================================================================

@dataclass(frozen=True)
class DiffRun:
    """Contiguous block of lines with the same change status.

    Both flags false means unchanged. `value` holds the lines, each
    terminated by a newline.
    """
    value: str
    added: bool = False
    removed: bool = False
    count: int = 0

    def __post_init__(self):
        if self.added and self.removed:
            raise ValueError("DiffRun cannot be both added and removed")

    @property
    def kind(self) -> str:
        if self.added:
            return "added"
        if self.removed:
            return "removed"
        return "unchanged"

    def lines(self) -> list[str]:
        """Split value into lines without their terminators."""
        return self.value.splitlines()


@dataclass
class DiffStats:
    additions: int = 0
    deletions: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions

    def to_dict(self) -> dict[str, int]:
        return {
            "additions": self.additions,
            "deletions": self.deletions,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class SideBySideLine:
    line_number: Optional[int]      # None for placeholder rows
    text: str
    kind: Literal["unchanged", "added", "removed", "placeholder"]


@dataclass(frozen=True)
class UnifiedLine:
    marker: str                     # "+", "-", or running line number
    text: str
    kind: Literal["unchanged", "added", "removed"]


@dataclass
class BillComparison:
    """Result of comparing two bill versions."""
    version_a: str
    version_b: str
    label_a: str
    label_b: str
    runs: list[DiffRun]
    stats: DiffStats
    normalized: bool = True

    @property
    def has_changes(self) -> bool:
        return self.stats.total_changes > 0


@dataclass(frozen=True)
class SearchResult:
    line_number: int
    text: str
    section: str


# =============================================================================
# VALIDATED OPTIONS / RESULTS
# =============================================================================

class ExportOptions(BaseModel):
    """Options for exporting a comparison report."""
    format: Literal["html", "markdown"] = Field("html", description="Output document format")
    include_highlights: bool = Field(True, description="Color added/removed lines in HTML")
    include_line_numbers: bool = Field(True, description="Prefix lines with line numbers")
    normalize: bool = Field(False, description="Run prepare_for_diff on both texts first")


class SummaryResult(BaseModel):
    """
    Outcome of one AI summary request.

    Both fields None means no summary has been requested yet; an error is
    always reported through `error`, never as an exception.
    """
    summary: Optional[str] = None
    error: Optional[str] = None
    model: str = ""
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.summary is not None and self.error is None
