# ============================================================================
# src/blood_report_analysis/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the blood report analysis pipeline.
"""

from typing import Optional


class ReportAnalysisError(Exception):
    """Base exception for all report analysis errors."""
    pass


class ExtractionError(ReportAnalysisError):
    """Document could not be turned into text (corrupt PDF, unreadable image)."""
    pass


class UnsupportedMediaTypeError(ExtractionError):
    """Document declares a media type no extraction branch handles."""
    def __init__(self, media_type: str):
        super().__init__(f"Unsupported media type: {media_type!r}")
        self.media_type = media_type


class ConfigurationError(ReportAnalysisError):
    """Missing credential, endpoint or engine setup."""
    pass


class ProviderError(ReportAnalysisError):
    """Provider returned a non-success response, no content, or the transport failed."""
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: Optional[str] = None
    ):
        super().__init__(message)
        self.status = status
        self.reason = reason

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


class ValidationError(ReportAnalysisError):
    """Provider output is malformed or does not match the result schema."""
    pass
