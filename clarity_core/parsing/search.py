import re
from typing import Optional

from clarity_core.models import SearchResult
from clarity_core.parsing.classifier import LineKind, classify_lines

MIN_QUERY_LENGTH = 2


def compile_search_pattern(query: str) -> Optional[re.Pattern]:
    """
    Compile a user query into a case-insensitive literal pattern.

    The query is escaped, so regex metacharacters ("10(b)", "U.S.C.", "[a]")
    match literally and never raise re.error.

    Returns:
        Compiled pattern, or None for queries shorter than MIN_QUERY_LENGTH
    """
    if not query or len(query) < MIN_QUERY_LENGTH:
        return None
    return re.compile(re.escape(query), re.IGNORECASE)


def search_bill(raw_text: str, query: str) -> list[SearchResult]:
    """
    Find every line containing the query, with the enclosing section label.

    Args:
        raw_text: Unmodified bill text
        query: User search string (literal, case-insensitive)

    Returns:
        SearchResult per matching line; section is "" before the first SEC. header
    """
    pattern = compile_search_pattern(query)
    if pattern is None:
        return []

    results: list[SearchResult] = []
    current_section = ""
    for line in classify_lines(raw_text):
        if line.kind is LineKind.SECTION:
            current_section = f"Section {line.number}: {line.heading}"
        if line.text and pattern.search(line.text):
            results.append(SearchResult(line.line_number, line.text, current_section))
    return results


def highlight_spans(text: str, query: str) -> list[tuple[str, bool]]:
    """
    Split text into (segment, is_match) pairs for highlighting a query.

    Returns:
        [(text, False)] when the query is too short or absent
    """
    pattern = compile_search_pattern(query)
    if pattern is None:
        return [(text, False)]

    spans: list[tuple[str, bool]] = []
    position = 0
    for match in pattern.finditer(text):
        if match.start() > position:
            spans.append((text[position:match.start()], False))
        spans.append((match.group(0), True))
        position = match.end()
    if position < len(text):
        spans.append((text[position:], False))
    return spans or [(text, False)]
