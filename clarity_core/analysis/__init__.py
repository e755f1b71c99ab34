from .changes import (
    diff_lines,
    summarize_diff,
    to_side_by_side,
    to_unified,
    compare_bill_texts,
)
from .prompts import build_section_summary_prompt, build_document_summary_prompt
from .llm import (
    generate_summary,
    summarize_section,
    summarize_text,
)

__all__ = [
    "diff_lines",
    "summarize_diff",
    "to_side_by_side",
    "to_unified",
    "compare_bill_texts",
    "build_section_summary_prompt",
    "build_document_summary_prompt",
    "generate_summary",
    "summarize_section",
    "summarize_text",
]
