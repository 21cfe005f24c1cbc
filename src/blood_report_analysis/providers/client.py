# ============================================================================
# src/blood_report_analysis/providers/client.py
# ============================================================================
"""
Analysis Provider Factory

Creates a provider for the configured backend:
- openai: ChatCompletionProvider
- inference: RemoteInferenceProvider

Usage:
    from blood_report_analysis.providers.client import create_provider

    provider = create_provider({'backend': 'inference',
                                'inference_endpoint': 'http://localhost:11434/api/analyze'})
    result = await provider.analyze(prompt)
"""

from typing import Any, Dict, Optional
import logging

from .base import BaseAnalysisProvider, BackendType
from .chat_provider import ChatCompletionProvider
from .inference_provider import RemoteInferenceProvider
from ..config import ProviderSettings, provider_settings
from ..utils.exceptions import ConfigurationError


_logger = logging.getLogger(__name__)


def settings_to_config(settings: Optional[ProviderSettings] = None) -> Dict[str, Any]:
    """Provider config dict from settings. The credential is not included."""
    settings = settings or provider_settings
    return {
        'backend': settings.ANALYSIS_BACKEND,
        'openai_model': settings.OPENAI_MODEL,
        'openai_chat_url': settings.OPENAI_CHAT_URL,
        'inference_endpoint': settings.INFERENCE_ENDPOINT,
    }


def create_provider(config: Optional[Dict[str, Any]] = None) -> BaseAnalysisProvider:
    """
    Factory function to create an analysis provider.

    Settings (environment / .env) are merged with the passed config; passed
    values take precedence.

    Args:
        config: Configuration dict with at minimum:
            - backend: "openai" | "inference" (default: from ANALYSIS_BACKEND)

            openai-specific:
            - openai_model, openai_chat_url

            inference-specific:
            - inference_endpoint

    Returns:
        Configured provider instance

    Raises:
        ConfigurationError: Unknown backend or missing endpoint
    """
    config = {**settings_to_config(), **(config or {})}
    backend = str(config.get('backend') or BackendType.OPENAI.value).lower()

    if backend == BackendType.OPENAI.value:
        provider = ChatCompletionProvider(config)

    elif backend == BackendType.INFERENCE.value:
        provider = RemoteInferenceProvider(config.get('inference_endpoint'), config)

    else:
        raise ConfigurationError(
            f"Unknown backend: {backend}. "
            f"Supported backends: {', '.join(b.value for b in BackendType)}"
        )

    _logger.debug(f"Created {backend} provider")
    return provider
