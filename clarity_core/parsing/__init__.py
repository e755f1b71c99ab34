from .normalizer import (
    normalize_bill_text,
    extract_substantive_content,
    prepare_for_diff,
    is_artifact_line,
)
from .citations import extract_citations, extract_citations_from_lines
from .classifier import LineKind, ClassifiedLine, classify_line, classify_lines
from .parser import (
    DEFAULT_BILL_TITLE,
    build_section_tree,
    extract_bill_date,
    extract_short_title,
    parse_bill,
)
from .search import search_bill, highlight_spans, compile_search_pattern

__all__ = [
    "normalize_bill_text",
    "extract_substantive_content",
    "prepare_for_diff",
    "is_artifact_line",
    "extract_citations",
    "extract_citations_from_lines",
    "LineKind",
    "ClassifiedLine",
    "classify_line",
    "classify_lines",
    "DEFAULT_BILL_TITLE",
    "build_section_tree",
    "extract_bill_date",
    "extract_short_title",
    "parse_bill",
    "search_bill",
    "highlight_spans",
    "compile_search_pattern",
]
