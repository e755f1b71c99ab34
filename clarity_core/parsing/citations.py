"""
Legal citation extraction.

Regex detection of statutory references in bill text. Patterns run
independently over the same text; matches are pooled in pattern order and
deduplicated by exact string, keeping first occurrence.

Patterns detected:
1. Section references: "Section 10(b)", "Sec. 4(a)(1)"
2. U.S. Code: "15 U.S.C. 78j(b)"
3. Code of Federal Regulations: "17 C.F.R. Part 240", "17 C.F.R. 240.10"
4. Acts by year: "Securities Exchange Act of 1934", "Act of 1933"
5. "Commodity Exchange Act"

Near-duplicates that differ only in punctuation ("U.S.C" vs "U.S.C.") are
kept as distinct citations.
"""
import re
from typing import Iterable

SECTION_REF_PATTERN = re.compile(
    r"(?:Section|Sec\.?)\s+\d+(?:\([a-z]\))?(?:\(\d+\))?",
    re.IGNORECASE
)

USC_PATTERN = re.compile(
    r"\d+\s+U\.S\.C\.?\s+\d+[a-z]?(?:\([a-z]\))?",
    re.IGNORECASE
)

CFR_PATTERN = re.compile(
    r"\d+\s+C\.F\.R\.?\s+(?:Part\s+)?\d+(?:\.\d+)?",
    re.IGNORECASE
)

ACT_OF_YEAR_PATTERN = re.compile(
    r"(?:Securities\s+)?(?:Exchange\s+)?Act\s+of\s+\d{4}",
    re.IGNORECASE
)

COMMODITY_EXCHANGE_ACT_PATTERN = re.compile(
    r"Commodity\s+Exchange\s+Act",
    re.IGNORECASE
)

CITATION_PATTERNS: tuple[re.Pattern, ...] = (
    SECTION_REF_PATTERN,
    USC_PATTERN,
    CFR_PATTERN,
    ACT_OF_YEAR_PATTERN,
    COMMODITY_EXCHANGE_ACT_PATTERN,
)


def _dedupe(citations: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for citation in citations:
        if citation not in seen:
            seen.add(citation)
            unique.append(citation)
    return unique


def _find_all(text: str) -> list[str]:
    found: list[str] = []
    for pattern in CITATION_PATTERNS:
        found.extend(match.group(0) for match in pattern.finditer(text))
    return found


def extract_citations(text: str) -> list[str]:
    """
    Extract legal citations from text.

    Args:
        text: Any bill text fragment

    Returns:
        Citations in first-seen order, exact duplicates removed
    """
    if not text:
        return []
    return _dedupe(_find_all(text))


def extract_citations_from_lines(lines: Iterable[str]) -> list[str]:
    """Pool citations line by line (each line scanned with every pattern), then dedupe."""
    pooled: list[str] = []
    for line in lines:
        pooled.extend(_find_all(line))
    return _dedupe(pooled)
