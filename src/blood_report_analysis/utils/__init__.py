# ============================================================================
# src/blood_report_analysis/utils/__init__.py
# ============================================================================
"""
Shared utilities: exceptions and logging helpers.
"""

from .exceptions import (
    ReportAnalysisError,
    ExtractionError,
    UnsupportedMediaTypeError,
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from .logging import setup_logging, redact_options, JsonFormatter, RedactingFormatter

__all__ = [
    'ReportAnalysisError',
    'ExtractionError',
    'UnsupportedMediaTypeError',
    'ConfigurationError',
    'ProviderError',
    'ValidationError',
    'setup_logging',
    'redact_options',
    'JsonFormatter',
    'RedactingFormatter',
]
