import logging
import time
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from clarity_core.analysis.prompts import build_document_summary_prompt, build_section_summary_prompt
from clarity_core.exceptions import SummaryError
from clarity_core.models import BillSection, SummaryResult
from clarity_core.utils import log_llm_cost

console = Console()
logger = logging.getLogger(__name__)

NO_CLIENT_MESSAGE = "AI Insight unavailable: no AI client is configured. Set GOOGLE_API_KEY or OPENAI_API_KEY."


# =============================================================================
# GEMINI RESPONSE TEXT
# =============================================================================
# Gemini "thinking" models return multi-part responses: thought parts carry
# encrypted reasoning traces, text parts carry the answer. The SDK's
# response.text accessor returns None when only thought parts exist, so fall
# back to the first non-thought text part.
# =============================================================================

def extract_text_from_gemini_response(response: Any) -> str:
    """
    Extract answer text from a Gemini response, skipping thought parts.

    Args:
        response: Gemini API response object with candidates[0].content.parts

    Returns:
        str: Text of the first non-empty, non-thought part

    Raises:
        SummaryError: If response has no candidates, no parts, or no text parts
    """
    if not response.candidates:
        raise SummaryError("Gemini response has no candidates")
    if not response.candidates[0].content:
        raise SummaryError("Gemini response candidate has no content")
    if not response.candidates[0].content.parts:
        raise SummaryError("Gemini response content has no parts")

    for part in response.candidates[0].content.parts:
        # thought can be True or None (not always False)
        if getattr(part, "thought", False) is True:
            continue
        if isinstance(part.text, str) and part.text.strip():
            return part.text

    raise SummaryError("No text part found in Gemini response")


def generate_with_gemini(prompt: str, gemini_client: Any, config: dict[str, Any]) -> str:
    gemini_config = config["llm"]["gemini"]
    response = gemini_client.models.generate_content(
        model=gemini_config["model"],
        contents=prompt,
        config={
            "temperature": gemini_config.get("temperature", 0.2),
            "max_output_tokens": gemini_config.get("max_output_tokens", 2048),
        }
    )
    text = response.text
    if not isinstance(text, str) or not text.strip():
        text = extract_text_from_gemini_response(response)
    return text


def generate_with_openai(prompt: str, openai_client: Any, config: dict[str, Any]) -> str:
    response = openai_client.responses.create(
        model=config["llm"]["openai"]["model"],
        input=prompt,
    )
    text = response.output_text
    if not isinstance(text, str) or not text.strip():
        raise SummaryError("OpenAI response has no output text")
    return text


def _select_client(
    config: dict[str, Any],
    gemini_client: Optional[Any],
    openai_client: Optional[Any]
) -> tuple[Optional[str], Optional[Any]]:
    # Configured provider first, the other one as a fallback
    provider = config["llm"].get("provider", "gemini")
    if provider == "openai" and openai_client:
        return "openai", openai_client
    if gemini_client:
        return "gemini", gemini_client
    if openai_client:
        return "openai", openai_client
    return None, None


def generate_summary(
    prompt: str,
    config: dict[str, Any],
    gemini_client: Optional[Any] = None,
    openai_client: Optional[Any] = None,
    truncated: bool = False,
) -> SummaryResult:
    """
    Send a summary prompt to the configured model with retry logic.

    Retries handle transient failures (rate limits, timeouts) with exponential
    backoff. Failures never propagate: they come back as SummaryResult.error.

    Args:
        prompt: Complete prompt text (already bounded)
        config: Configuration dictionary
        gemini_client: Gemini client instance
        openai_client: OpenAI client instance
        truncated: Whether the prompt's source text was cut

    Returns:
        SummaryResult with summary or error
    """
    provider, client = _select_client(config, gemini_client, openai_client)
    if client is None:
        return SummaryResult(error=NO_CLIENT_MESSAGE, truncated=truncated)

    model_name = config["llm"][provider]["model"]
    retry_config = config["llm"].get("retry", {})
    max_retries = max(1, retry_config.get("max_retries", 2))
    base_delay = retry_config.get("base_delay", 1.0)
    debug_responses = config.get("debug", {}).get("llm_responses", False)
    last_error: Optional[str] = None

    for attempt in range(max_retries):
        try:
            if provider == "gemini":
                text = generate_with_gemini(prompt, client, config)
            else:
                text = generate_with_openai(prompt, client, config)

            if debug_responses:
                console.print(f"[dim]DEBUG {provider} response: {escape(text[:200])}...[/dim]")

            log_llm_cost(model_name, prompt, text)
            logger.debug("Summary generated by %s (%d chars)", model_name, len(text))
            return SummaryResult(summary=text.strip(), model=model_name, truncated=truncated)

        except Exception as e:
            last_error = str(e) or e.__class__.__name__
            logger.warning("Summary request failed on attempt %d/%d: %s", attempt + 1, max_retries, last_error)
            if attempt == max_retries - 1:
                console.print(f"[red]AI summary failed after {max_retries} attempts: {escape(last_error)}[/red]")
                break

        delay = base_delay * (2 ** attempt)
        console.print(
            f"[yellow]AI summary failed ({escape(last_error)}), retrying in {delay}s... "
            f"(attempt {attempt + 1}/{max_retries})[/yellow]"
        )
        time.sleep(delay)

    return SummaryResult(
        error=f"AI Insight Error: {last_error}.",
        model=model_name,
        truncated=truncated,
    )


def summarize_section(
    section: BillSection,
    config: dict[str, Any],
    gemini_client: Optional[Any] = None,
    openai_client: Optional[Any] = None,
) -> SummaryResult:
    """Summarize one bill section (header + first 2000 characters of content)."""
    prompt, truncated = build_section_summary_prompt(section)
    return generate_summary(prompt, config, gemini_client, openai_client, truncated=truncated)


def summarize_text(
    text: str,
    config: dict[str, Any],
    gemini_client: Optional[Any] = None,
    openai_client: Optional[Any] = None,
) -> SummaryResult:
    """Summarize free legislative text (first 3000 characters)."""
    if not text or not text.strip():
        return SummaryResult(error="AI Insight Error: no text to summarize.")
    prompt, truncated = build_document_summary_prompt(text)
    return generate_summary(prompt, config, gemini_client, openai_client, truncated=truncated)
