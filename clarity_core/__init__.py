# CLARITY Act Bill Comparison Core Library
# Main entry point: from clarity_core.orchestrator import run_comparison

from .config import load_config
from .orchestrator import (
    run_comparison,
    load_bills,
    compare_versions,
    browse_bill,
    search_bills,
    summarize_bill_section,
)

from .models import (
    BILL_VERSIONS,
    VERSION_LABELS,
    BillSection,
    ParsedBill,
    DiffRun,
    DiffStats,
    BillComparison,
    SearchResult,
    ExportOptions,
    SummaryResult,
    detect_version,
    get_version_label,
)

from .exceptions import ClarityError, BillLoadError, SummaryError, ConfigError

from .utils import (
    CostTracker,
    LLMUsage,
    log_llm_cost,
    get_cost_summary,
    reset_cost_tracker,
    estimate_tokens,
)

__all__ = [
    # Workflows
    "run_comparison",
    "load_bills",
    "compare_versions",
    "browse_bill",
    "search_bills",
    "summarize_bill_section",
    "load_config",
    # Models
    "BILL_VERSIONS",
    "VERSION_LABELS",
    "BillSection",
    "ParsedBill",
    "DiffRun",
    "DiffStats",
    "BillComparison",
    "SearchResult",
    "ExportOptions",
    "SummaryResult",
    "detect_version",
    "get_version_label",
    # Errors
    "ClarityError",
    "BillLoadError",
    "SummaryError",
    "ConfigError",
    # Utils
    "CostTracker",
    "LLMUsage",
    "log_llm_cost",
    "get_cost_summary",
    "reset_cost_tracker",
    "estimate_tokens",
]
