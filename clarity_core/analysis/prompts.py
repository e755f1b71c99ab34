from clarity_core.models import BillSection
from clarity_core.utils import truncate_text

# Character budgets for text sent to the model
SECTION_CONTENT_LIMIT: int = 2000
DOCUMENT_TEXT_LIMIT: int = 3000

SECTION_SUMMARY_PROMPT = """Provide a concise summary of this legislative section in 2-3 sentences. Focus on the key provisions and their implications:

Section: {section_number} - {section_title}
Content: {content}"""

DOCUMENT_SUMMARY_PROMPT = """Concisely summarize the key points of the following legislative text in 2-3 short paragraphs, focusing on the core provisions, objectives, and any noted differences or implications for regulatory frameworks:

{text}"""


def build_section_summary_prompt(section: BillSection) -> tuple[str, bool]:
    """
    Build the summary prompt for one bill section.

    Args:
        section: Section to summarize (content bounded to SECTION_CONTENT_LIMIT)

    Returns:
        (prompt, whether the content was truncated)
    """
    content, truncated = truncate_text(section.content, SECTION_CONTENT_LIMIT)
    prompt = SECTION_SUMMARY_PROMPT.format(
        section_number=section.section_number,
        section_title=section.title or "(untitled)",
        content=content,
    )
    return prompt, truncated


def build_document_summary_prompt(text: str) -> tuple[str, bool]:
    """Build the summary prompt for free text, bounded to DOCUMENT_TEXT_LIMIT characters."""
    bounded, truncated = truncate_text(text, DOCUMENT_TEXT_LIMIT, suffix="")
    return DOCUMENT_SUMMARY_PROMPT.format(text=bounded), truncated
