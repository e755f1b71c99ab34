"""
Custom exceptions for the Clarity bill-text pipeline.

Normalization and parsing never raise: they degrade to looser results.
Only I/O (document loading, AI summary calls) and invalid configuration
produce these errors.
"""
from typing import Optional


class ClarityError(Exception):
    """Base exception for Clarity bill-text errors."""
    pass


class BillLoadError(ClarityError):
    """One of the bill documents could not be fetched or read.

    The whole load is aborted; callers must not parse a partial set.
    """

    def __init__(self, message: str, version: Optional[str] = None, source: Optional[str] = None):
        super().__init__(message)
        self.version = version
        self.source = source


class SummaryError(ClarityError):
    """AI model returned an empty or unusable response."""
    pass


class ConfigError(ClarityError):
    """Configuration or option values are invalid."""
    pass
