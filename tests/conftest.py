"""
Pytest fixtures and configuration.

Following TDD principles:
- Fixtures provide real-world-like bill text (drafting-system artifacts included)
- Mocks used only when unavoidable (LLM clients, HTTP transport)
- Each test should be independent and fast
"""
import copy
import pytest
from unittest.mock import MagicMock
from typing import Any

from clarity_core.config import DEFAULT_CONFIG


# =============================================================================
# SAMPLE BILL TEXT FIXTURES
# =============================================================================
# Line numbers of sample_bill_text (1-based), used by parser/search tests:
#    1 VerDate stamp             13 TITLE I—DEFINITIONS
#    2 g:\ path                  14 SEC. 101. DEFINITIONS.
#    3 date/time stamp           15 definition (citations)
#    9 page number "1"           16 page number "2"
#   10 enacting clause           17 SEC. 102. RULEMAKING.
#   11 SECTION 1. SHORT TITLE.   19 TITLE II—REGISTRATION
#   12 short title sentence      20 SEC. 201 ... 22 SEC. 202 ... 23 last line
# =============================================================================

SAMPLE_BILL_LINES = [
    "VerDate Mar 15 2010  10:30 Jul 10, 2025 Jkt 000000 PO 00000 Frm 00001 Fmt 6652 Sfmt 6201",
    "g:\\VHLC\\071025\\071025.123.xml",
    "July 10, 2025 (10:30 a.m.)",
    "119TH CONGRESS",
    "1ST SESSION",
    "H. R. 3633",
    "To provide for a system of regulation of digital assets.",
    "",
    "1",
    "Be it enacted by the Senate and House of Representatives of the United States of America in Congress assembled,",
    "SECTION 1. SHORT TITLE.",
    "This Act may be cited as the “Digital Asset Market Clarity Act of 2025”.",
    "TITLE I—DEFINITIONS",
    "SEC. 101. DEFINITIONS.",
    "In this Act, the term “digital commodity” has the meaning given in section 1a of the "
    "Commodity Exchange Act (7 U.S.C. 1a).",
    "2",
    "SEC. 102. RULEMAKING.",
    "The Commission shall issue rules under Section 10(b) of the Securities Exchange Act of 1934 "
    "and 17 C.F.R. 240.10.",
    "TITLE II—REGISTRATION",
    "SEC. 201. REGISTRATION OF EXCHANGES.",
    "A digital commodity exchange shall register with the Commission.",
    "SEC. 202. EFFECTIVE DATE.",
    "This title takes effect 360 days after the date of enactment.",
]


def _replace_line(lines: list[str], old: str, new: str) -> list[str]:
    return [new if line == old else line for line in lines]


@pytest.fixture
def sample_bill_text() -> str:
    """Introduced bill with artifacts, 5 section headers, and an enacting clause."""
    return "\n".join(SAMPLE_BILL_LINES) + "\n"


@pytest.fixture
def hfsc_bill_text() -> str:
    """Financial Services substitute: XML marker, one changed sentence, one new section."""
    lines = ["CLARITY_ANS_FSC.XML"] + _replace_line(
        SAMPLE_BILL_LINES,
        "A digital commodity exchange shall register with the Commission.",
        "A digital commodity exchange shall register with the Commission within 180 days.",
    )
    lines += [
        "SEC. 203. STUDY.",
        "The Commission shall submit a report to Congress.",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def hag_bill_text() -> str:
    """Agriculture substitute: XML marker and a reworded rulemaking section."""
    lines = ["CLARITY_ANS_AG.XML"] + _replace_line(
        SAMPLE_BILL_LINES,
        "SEC. 102. RULEMAKING.",
        "SEC. 102. JOINT RULEMAKING.",
    )
    return "\n".join(lines) + "\n"


@pytest.fixture
def nested_bill_text() -> str:
    """Minimal two-title bill."""
    return "TITLE I—FOO\nSEC. 1. BAR\ncontent line\nTITLE II—BAZ\nSEC. 2. QUX\n"


# =============================================================================
# MOCK LLM CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def mock_gemini_client():
    """Mock Gemini client that returns a plain-text summary."""
    client = MagicMock()

    mock_response = MagicMock()
    mock_response.text = "This section defines digital commodities."
    mock_response.candidates = [MagicMock()]
    mock_response.candidates[0].content = MagicMock()

    text_part = MagicMock()
    text_part.text = "This section defines digital commodities."
    text_part.thought = False
    mock_response.candidates[0].content.parts = [text_part]

    client.models.generate_content.return_value = mock_response
    return client


@pytest.fixture
def mock_gemini_client_with_thought_signature():
    """Mock Gemini client with thought parts and no top-level text (thinking model)."""
    client = MagicMock()

    mock_response = MagicMock()
    mock_response.text = None
    mock_response.candidates = [MagicMock()]
    mock_response.candidates[0].content = MagicMock()

    thought_part = MagicMock()
    thought_part.text = "encrypted_reasoning_trace"
    thought_part.thought = True

    text_part = MagicMock()
    text_part.text = "Registration requirements for exchanges."
    text_part.thought = False

    mock_response.candidates[0].content.parts = [thought_part, text_part]
    client.models.generate_content.return_value = mock_response
    return client


@pytest.fixture
def mock_gemini_client_failure():
    """Mock Gemini client that raises an exception."""
    client = MagicMock()
    client.models.generate_content.side_effect = Exception("API rate limit exceeded")
    return client


@pytest.fixture
def mock_openai_client():
    """Mock OpenAI client that returns a plain-text summary."""
    client = MagicMock()
    mock_response = MagicMock()
    mock_response.output_text = "OpenAI summary of the section."
    client.responses.create.return_value = mock_response
    return client


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def sample_config() -> dict[str, Any]:
    """Default configuration with short document paths."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["documents"]["paths"] = {
        "original": "original.txt",
        "hfsc": "hfsc.txt",
        "hag": "hag.txt",
    }
    return config


@pytest.fixture
def bill_files_config(tmp_path, sample_config, sample_bill_text, hfsc_bill_text, hag_bill_text):
    """Config pointing at the three bill versions written to tmp_path."""
    (tmp_path / "original.txt").write_text(sample_bill_text, encoding="utf-8")
    (tmp_path / "hfsc.txt").write_text(hfsc_bill_text, encoding="utf-8")
    (tmp_path / "hag.txt").write_text(hag_bill_text, encoding="utf-8")
    sample_config["documents"]["root"] = str(tmp_path)
    sample_config["export"]["output_dir"] = str(tmp_path / "reports")
    return sample_config
