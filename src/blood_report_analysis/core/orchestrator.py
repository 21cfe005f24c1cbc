# ============================================================================
# src/blood_report_analysis/core/orchestrator.py
# ============================================================================
"""
Report Analysis Orchestrator

Main entry point for analyzing one uploaded report.

Flow:
1. Extract text from the document (PDF page walk or image OCR)
2. Build the analysis prompt
3. Send it to the chosen provider
4. Return the provider's validated AnalysisResult

Stages run strictly in sequence. Nothing is retried and errors from any
stage (ExtractionError, ConfigurationError, ProviderError, ValidationError)
reach the caller unchanged.
"""

from typing import Any, Dict, Optional
import logging
from datetime import datetime

from .document import AnalysisRequest, SourceDocument
from ..config import ProviderSettings, provider_settings
from ..extractors.document_extractor import DocumentExtractor
from ..providers.base import BaseAnalysisProvider
from ..providers.chat_provider import ChatCompletionProvider
from ..providers.client import settings_to_config
from ..providers.inference_provider import RemoteInferenceProvider
from ..providers.prompts import build_analysis_prompt
from ..utils.exceptions import ConfigurationError
from ..validators.schema import AnalysisResult


class ReportAnalysisPipeline:
    """
    Extractor -> Prompt Builder -> Provider -> Validator, one document per call.

    Holds no per-run state, so one pipeline can serve concurrent callers.
    """

    def __init__(self, extractor: Optional[DocumentExtractor] = None):
        self.logger = logging.getLogger(__name__)
        self.extractor = extractor or DocumentExtractor()

    async def analyze(
        self,
        doc: SourceDocument,
        provider: BaseAnalysisProvider,
        options: Optional[Dict[str, Any]] = None
    ) -> AnalysisResult:
        """
        Analyze a single report.

        Args:
            doc: Uploaded document
            provider: Backend that interprets the text
            options: Provider options (credentials, headers, extra body fields)

        Returns:
            Validated AnalysisResult
        """
        start_time = datetime.now()

        text = await self.extractor.extract(doc)

        self.logger.info(
            f"Extracted {len(text)} chars from {doc.filename or 'document'} ({doc.media_type})"
        )
        self.logger.debug(f"Extracted text: {text}")

        request = AnalysisRequest(prompt=build_analysis_prompt(text), options=dict(options or {}))
        self.logger.debug(
            f"Sending {len(request.prompt)} char prompt to {provider.backend_type.value} provider",
            extra={"options": request.options}
        )

        try:
            result = await provider.analyze(request.prompt, request.options)
        except Exception as e:
            self.logger.error(f"Analysis error: {e}")
            raise

        elapsed = (datetime.now() - start_time).total_seconds()
        self.logger.info(
            f"Analysis complete in {elapsed:.2f}s: healthStatus={result.healthStatus}, "
            f"{len(result.keyFindings)} finding(s), {len(result.supplements)} supplement(s)"
        )
        return result


async def analyze_report(
    doc: SourceDocument,
    provider: BaseAnalysisProvider,
    options: Optional[Dict[str, Any]] = None
) -> AnalysisResult:
    """Analyze one document with the given provider."""
    return await ReportAnalysisPipeline().analyze(doc, provider, options)


async def analyze_with_openai(
    doc: SourceDocument,
    settings: Optional[ProviderSettings] = None
) -> AnalysisResult:
    """
    Analyze with the chat-completion backend using the OPENAI_API_KEY credential.

    Raises:
        ConfigurationError: Credential not set (raised before any request)
    """
    settings = settings or provider_settings
    api_key = settings.get_api_key()
    if not api_key:
        raise ConfigurationError(
            "Missing OpenAI API key. Set OPENAI_API_KEY in the environment or .env file."
        )

    provider = ChatCompletionProvider(settings_to_config(settings))
    return await analyze_report(doc, provider, {'api_key': api_key})


async def analyze_with_inference_endpoint(
    doc: SourceDocument,
    endpoint: Optional[str] = None,
    settings: Optional[ProviderSettings] = None
) -> AnalysisResult:
    """Analyze with the remote inference backend (INFERENCE_ENDPOINT by default)."""
    settings = settings or provider_settings
    provider = RemoteInferenceProvider(endpoint or settings.INFERENCE_ENDPOINT)
    return await analyze_report(doc, provider)
