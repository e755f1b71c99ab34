"""
Bill text normalization for comparison.

Legislative text exported from the drafting system's PDFs carries heavy
boilerplate: "VerDate" generation stamps, file paths, standalone page
numbers, leader dots, XML source markers, and clock times. None of it is a
substantive edit, but a naive line diff reports every shifted page number as
a change. Normalization strips it deterministically.

Pipeline:
    normalize_bill_text()          artifact lines out, whitespace collapsed
    extract_substantive_content()  drop front matter before the enacting clause
    prepare_for_diff()             both of the above + typographic folding

normalize_bill_text is idempotent: every surviving line is already in the
form the per-line cleaner produces, so a second pass changes nothing.
"""
import re

# =============================================================================
# ARTIFACT PATTERNS
# =============================================================================

MONTHS = (
    "January|February|March|April|May|June|July|"
    "August|September|October|November|December"
)

# Whole-line artifacts (matched against a stripped line)
ARTIFACT_LINE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^VerDate"),                                  # generation stamp
    re.compile(r"^g:\\", re.IGNORECASE),                      # drafting share path
    re.compile(r"^[A-Z]:\\"),                                 # drive-letter path
    re.compile(r"^\\\\"),                                     # UNC path
    re.compile(r"^\d+:\d+\s+[ap]\.m\.", re.IGNORECASE),       # bare clock time
    re.compile(r"^\d+$"),                                     # page number
    re.compile(r"^\.{5,}$"),                                  # leader dots
    re.compile(r"^[A-Z]+_[A-Z]+_[A-Z]+\.XML$", re.IGNORECASE),  # XML source marker
    re.compile(r"^\(\d+\|\d+\)$"),                            # paired-number marker
)

# Embedded substrings removed anywhere in a line
EMBEDDED_TIME_PATTERN = re.compile(r"\b\d{1,2}:\d{2}\s*(?:[ap]\.m\.|[ap]m\b)", re.IGNORECASE)
EMBEDDED_DATE_PATTERN = re.compile(rf"\b(?:{MONTHS})\s+\d{{1,2}},\s+\d{{4}}", re.IGNORECASE)

SPACE_RUN_PATTERN = re.compile(r" {2,}")
SECTION_PREFIX_PATTERN = re.compile(r"^\d+\s+(SEC\.|SECTION)\s+")

# Front matter ends at the enacting clause or the first section
ENACTMENT_MARKERS: tuple[str, ...] = ("Be it enacted by", "SECTION 1.")
SECTION_HEADER_PATTERN = re.compile(r"^(?:SEC\.|SECTION)\s+\d+")
MIN_SUBSTANTIVE_SECTIONS = 5

# Typographic folding for diff preparation
DOUBLE_QUOTES_PATTERN = re.compile(r"[\u201c\u201d]")
SINGLE_QUOTES_PATTERN = re.compile(r"[\u2018\u2019]")
DASHES_PATTERN = re.compile(r"[\u2014\u2013]")
SPACE_BEFORE_PUNCT_PATTERN = re.compile(r"[ \t]+([,.;:])")
SPACE_AFTER_PUNCT_PATTERN = re.compile(r"([,.;:])[ \t]+")


def is_artifact_line(line: str) -> bool:
    """True when a line is pagination, metadata, or a drafting-system marker."""
    stripped = line.strip()
    return any(pattern.search(stripped) for pattern in ARTIFACT_LINE_PATTERNS)


def _strip_embedded_stamps(line: str) -> str:
    # Removing one stamp can expose another; loop to a fixed point
    while True:
        cleaned = EMBEDDED_TIME_PATTERN.sub("", line)
        cleaned = EMBEDDED_DATE_PATTERN.sub("", cleaned)
        if cleaned == line:
            return cleaned
        line = cleaned


def _clean_line(line: str) -> str:
    cleaned = _strip_embedded_stamps(line)
    cleaned = cleaned.replace("\t", " ")
    cleaned = SPACE_RUN_PATTERN.sub(" ", cleaned).strip()
    return SECTION_PREFIX_PATTERN.sub(r"\1 ", cleaned)


def normalize_bill_text(text: str) -> str:
    """
    Normalize bill text by removing formatting artifacts and whitespace noise.

    Args:
        text: Raw bill text (any line-ending convention)

    Returns:
        Newline-joined non-empty lines, no trailing newline
    """
    kept: list[str] = []
    for raw_line in text.splitlines():
        if is_artifact_line(raw_line):
            continue
        line = _clean_line(raw_line)
        if not line or is_artifact_line(line):
            continue
        kept.append(line)
    return "\n".join(kept)


def extract_substantive_content(text: str) -> str:
    """
    Keep only the enacted body of a normalized bill.

    Lines before the enacting clause (cover page, table of contents) are
    discarded. When fewer than five section headers survive, the heuristic
    is assumed to have missed and the full normalized text is returned.

    Args:
        text: Bill text, normalized or raw

    Returns:
        Substantive lines joined by newlines
    """
    substantive: list[str] = []
    in_content = False
    section_count = 0

    for line in text.splitlines():
        if any(marker in line for marker in ENACTMENT_MARKERS):
            in_content = True
        if not in_content:
            continue
        if is_artifact_line(line) or not line.strip():
            continue

        substantive.append(line)
        if SECTION_HEADER_PATTERN.match(line):
            section_count += 1

    if section_count < MIN_SUBSTANTIVE_SECTIONS:
        return normalize_bill_text(text)

    return "\n".join(substantive)


def prepare_for_diff(text: str) -> str:
    """
    Prepare bill text for line diffing.

    Normalizes, restricts to substantive content, then folds typography:
    curly quotes become straight, em/en dashes become hyphens, and spacing
    around , . ; : is canonicalized. Line boundaries are preserved.
    """
    prepared = normalize_bill_text(text)
    prepared = extract_substantive_content(prepared)

    prepared = DOUBLE_QUOTES_PATTERN.sub('"', prepared)
    prepared = SINGLE_QUOTES_PATTERN.sub("'", prepared)
    prepared = DASHES_PATTERN.sub("-", prepared)

    prepared = SPACE_BEFORE_PUNCT_PATTERN.sub(r"\1", prepared)
    prepared = SPACE_AFTER_PUNCT_PATTERN.sub(r"\1 ", prepared)
    return prepared
