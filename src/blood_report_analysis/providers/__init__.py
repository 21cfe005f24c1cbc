# ============================================================================
# src/blood_report_analysis/providers/__init__.py
# ============================================================================
"""
Analysis providers - interchangeable backends behind one contract
"""

from .base import BaseAnalysisProvider, BackendType, HTTPResponse
from .chat_provider import ChatCompletionProvider
from .inference_provider import RemoteInferenceProvider
from .client import create_provider
from .prompts import build_analysis_prompt, JSON_ONLY_SYSTEM_INSTRUCTION

__all__ = [
    "BaseAnalysisProvider",
    "BackendType",
    "HTTPResponse",
    "ChatCompletionProvider",
    "RemoteInferenceProvider",
    "create_provider",
    "build_analysis_prompt",
    "JSON_ONLY_SYSTEM_INSTRUCTION",
]
