# ============================================================================
# src/blood_report_analysis/validators/__init__.py
# ============================================================================
"""
Validators Package

Schema for the structured analysis result and the parser/validator that
produces it from raw provider output.
"""

from .schema import (
    AnalysisResult,
    Supplement,
    Priority,
    HealthStatus,
    PRIORITIES,
    HEALTH_STATUSES,
)
from .response_validator import (
    validate_response,
    parse_response,
    MALFORMED_RESPONSE,
)

__all__ = [
    'AnalysisResult',
    'Supplement',
    'Priority',
    'HealthStatus',
    'PRIORITIES',
    'HEALTH_STATUSES',
    'validate_response',
    'parse_response',
    'MALFORMED_RESPONSE',
]
