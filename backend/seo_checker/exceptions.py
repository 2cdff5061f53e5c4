"""
Error taxonomy for the analysis pipeline.

Only InputError, FetchError and InternalError ever reach the caller.
ProbeError, ExtractionError and AnalyzerError are recovered where they
happen and only show up in logs or in a SubScore's details.
"""
from typing import Optional


class SeoAnalysisError(Exception):
    """Base class for all pipeline errors."""
    status_code: int = 500
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(SeoAnalysisError):
    """The submitted URL is malformed or not allowed."""
    status_code = 400


class FetchError(SeoAnalysisError):
    """The target page could not be fetched (network error or non-2xx)."""
    status_code = 400
    
    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ProbeError(SeoAnalysisError):
    """robots.txt / sitemap.xml probe failed. Recorded as 'file absent'."""


class ExtractionError(SeoAnalysisError):
    """A single block (e.g. JSON-LD) could not be parsed."""


class AnalyzerError(SeoAnalysisError):
    """An analyzer raised. Its result falls back to the empty state."""
    
    def __init__(self, analyzer: str, message: str):
        super().__init__(f"{analyzer}: {message}")
        self.analyzer = analyzer


class InternalError(SeoAnalysisError):
    """Aggregation or engine bug. The only fatal class."""
    status_code = 500
