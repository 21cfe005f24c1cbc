# ============================================================================
# src/blood_report_analysis/__init__.py
# ============================================================================
"""
Blood report analysis: document text extraction, provider-backed
interpretation and schema-validated results.
"""

from .core.document import SourceDocument, AnalysisRequest
from .core.orchestrator import (
    ReportAnalysisPipeline,
    analyze_report,
    analyze_with_openai,
    analyze_with_inference_endpoint,
)
from .providers import (
    BaseAnalysisProvider,
    ChatCompletionProvider,
    RemoteInferenceProvider,
    create_provider,
    build_analysis_prompt,
)
from .validators import AnalysisResult, Supplement, validate_response
from .utils.exceptions import (
    ReportAnalysisError,
    ExtractionError,
    ConfigurationError,
    ProviderError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "SourceDocument",
    "AnalysisRequest",
    "ReportAnalysisPipeline",
    "analyze_report",
    "analyze_with_openai",
    "analyze_with_inference_endpoint",
    "BaseAnalysisProvider",
    "ChatCompletionProvider",
    "RemoteInferenceProvider",
    "create_provider",
    "build_analysis_prompt",
    "AnalysisResult",
    "Supplement",
    "validate_response",
    "ReportAnalysisError",
    "ExtractionError",
    "ConfigurationError",
    "ProviderError",
    "ValidationError",
]
