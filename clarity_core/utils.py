from dataclasses import dataclass, field
from datetime import datetime


# =============================================================================
# TEXT HELPERS
# =============================================================================

def estimate_tokens(text: str) -> int:
    """
    Rough token count estimation (4 chars ≈ 1 token for English).
    """
    if not text:
        return 0
    return len(text) // 4


def truncate_text(text: str, max_chars: int, suffix: str = "...") -> tuple[str, bool]:
    """
    Cut text to at most max_chars characters before sending it to a model.

    Args:
        text: Text to bound
        max_chars: Character budget for the text itself (suffix not counted)
        suffix: Marker appended when text was cut

    Returns:
        (bounded text, whether truncation happened)
    """
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars] + suffix, True


def epoch_millis(moment: datetime | None = None) -> int:
    moment = moment or datetime.now()
    return int(moment.timestamp() * 1000)


# =============================================================================
# LLM COST TRACKING
# =============================================================================

LLM_COSTS = {
    "gpt-5": {"input": 0.01, "output": 0.03},
    "gemini-2.5-flash": {"input": 0.0003, "output": 0.0025},
}


@dataclass
class LLMUsage:
    """Track LLM usage per call."""
    model: str
    input_tokens: int
    output_tokens: int
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def estimated_cost(self) -> float:
        costs = LLM_COSTS.get(self.model, {"input": 0.01, "output": 0.03})
        input_cost = (self.input_tokens / 1000) * costs["input"]
        output_cost = (self.output_tokens / 1000) * costs["output"]
        return input_cost + output_cost


@dataclass
class CostTracker:
    """Accumulate LLM costs across a session."""
    usages: list = field(default_factory=list)

    def add(self, model: str, input_tokens: int, output_tokens: int) -> LLMUsage:
        usage = LLMUsage(model=model, input_tokens=input_tokens, output_tokens=output_tokens)
        self.usages.append(usage)
        return usage

    @property
    def total_cost(self) -> float:
        return sum(u.estimated_cost for u in self.usages)

    def summary(self) -> dict:
        return {
            "total_calls": len(self.usages),
            "total_input_tokens": sum(u.input_tokens for u in self.usages),
            "total_output_tokens": sum(u.output_tokens for u in self.usages),
            "estimated_cost_usd": round(self.total_cost, 4),
        }


# Global cost tracker instance
cost_tracker = CostTracker()


def log_llm_cost(model: str, prompt: str, response_text: str) -> LLMUsage:
    return cost_tracker.add(model, estimate_tokens(prompt), estimate_tokens(response_text))


def get_cost_summary() -> dict:
    return cost_tracker.summary()


def reset_cost_tracker():
    global cost_tracker
    cost_tracker = CostTracker()
