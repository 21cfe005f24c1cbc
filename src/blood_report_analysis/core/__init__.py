# ============================================================================
# src/blood_report_analysis/core/__init__.py
# ============================================================================
"""
Core data types for one analysis run.

The orchestrator lives in core.orchestrator and is imported from there
(or from the package root).
"""

from .document import (
    SourceDocument,
    AnalysisRequest,
    PDF_MEDIA_TYPE,
    SUPPORTED_MEDIA_TYPES,
    normalize_media_type,
)

__all__ = [
    "SourceDocument",
    "AnalysisRequest",
    "PDF_MEDIA_TYPE",
    "SUPPORTED_MEDIA_TYPES",
    "normalize_media_type",
]
