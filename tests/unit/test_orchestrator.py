# ============================================================================
# FILE: tests/unit/test_orchestrator.py
# ============================================================================
"""
Unit tests for the report analysis orchestrator
"""

import json
import logging

import pytest
from unittest.mock import AsyncMock, Mock

from blood_report_analysis.config import ProviderSettings
from blood_report_analysis.core.document import SourceDocument
from blood_report_analysis.core.orchestrator import (
    ReportAnalysisPipeline,
    analyze_report,
    analyze_with_inference_endpoint,
    analyze_with_openai,
)
from blood_report_analysis.providers import (
    BaseAnalysisProvider,
    BackendType,
    HTTPResponse,
    RemoteInferenceProvider,
)
from blood_report_analysis.providers.chat_provider import ChatCompletionProvider
from blood_report_analysis.utils.logging import JsonFormatter, RedactingFormatter
from blood_report_analysis.utils.exceptions import (
    ConfigurationError,
    ExtractionError,
    ProviderError,
    ValidationError,
)
from blood_report_analysis.validators import validate_response


class StubProvider(BaseAnalysisProvider):
    """Returns a canned raw response through the validator"""

    def __init__(self, raw=None, error=None):
        super().__init__()
        self.raw = raw
        self.error = error
        self.calls = []

    @property
    def backend_type(self) -> BackendType:
        return BackendType.INFERENCE

    async def analyze(self, prompt, options=None):
        self.calls.append((prompt, options))
        if self.error is not None:
            raise self.error
        return validate_response(self.raw)


def _extractor_returning(text):
    extractor = Mock()
    extractor.extract = AsyncMock(return_value=text)
    return extractor


@pytest.mark.asyncio
async def test_end_to_end_pdf_returns_provider_object_unmodified(hemoglobin_pdf, sample_result):
    provider = RemoteInferenceProvider("http://llm.test/api/analyze")
    provider._post = AsyncMock(
        return_value=HTTPResponse(200, "OK", json.dumps(sample_result))
    )

    result = await analyze_report(hemoglobin_pdf, provider)

    assert result.to_dict() == sample_result

    body = provider._post.call_args.args[1]
    assert body["prompt"].endswith("Hemoglobin 13.5 g/dL")


@pytest.mark.asyncio
async def test_prompt_built_from_extracted_text(sample_result):
    provider = StubProvider(raw=json.dumps(sample_result))
    pipeline = ReportAnalysisPipeline(extractor=_extractor_returning("WBC 7.2\nRBC 4.8"))

    await pipeline.analyze(SourceDocument(b"%PDF", "application/pdf"), provider, {"model": "x"})

    prompt, options = provider.calls[0]
    assert prompt.endswith("WBC 7.2\nRBC 4.8")
    assert options == {"model": "x"}


@pytest.mark.asyncio
async def test_provider_called_exactly_once(sample_result):
    provider = StubProvider(raw=sample_result)
    pipeline = ReportAnalysisPipeline(extractor=_extractor_returning("text"))

    await pipeline.analyze(SourceDocument(b"img", "image/png"), provider)

    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_rate_limit_error_propagates_unchanged(hemoglobin_pdf):
    provider = RemoteInferenceProvider("http://llm.test/api/analyze")
    provider._post = AsyncMock(return_value=HTTPResponse(429, "Too Many Requests", ""))

    with pytest.raises(ProviderError) as excinfo:
        await analyze_report(hemoglobin_pdf, provider)

    assert excinfo.value.status == 429
    assert "429" in str(excinfo.value)


@pytest.mark.parametrize("error", [
    ProviderError("Inference API error (429): Too Many Requests", status=429),
    ValidationError("malformed response"),
    ConfigurationError("missing key"),
])
@pytest.mark.asyncio
async def test_stage_errors_are_the_same_object(error):
    provider = StubProvider(error=error)
    pipeline = ReportAnalysisPipeline(extractor=_extractor_returning("text"))

    with pytest.raises(type(error)) as excinfo:
        await pipeline.analyze(SourceDocument(b"%PDF", "application/pdf"), provider)

    assert excinfo.value is error


@pytest.mark.asyncio
async def test_extraction_error_stops_pipeline():
    extraction_error = ExtractionError("Could not parse PDF")
    extractor = Mock()
    extractor.extract = AsyncMock(side_effect=extraction_error)
    provider = StubProvider(raw={})

    with pytest.raises(ExtractionError) as excinfo:
        await ReportAnalysisPipeline(extractor=extractor).analyze(
            SourceDocument(b"junk", "application/pdf"), provider
        )

    assert excinfo.value is extraction_error
    assert provider.calls == []


@pytest.mark.asyncio
async def test_trace_includes_text_but_not_credentials(caplog, sample_result):
    provider = StubProvider(raw=sample_result)
    pipeline = ReportAnalysisPipeline(extractor=_extractor_returning("Ferritin 12 ng/mL"))
    options = {
        "api_key": "sk-live-SECRET",
        "headers": {"Authorization": "Bearer sk-live-SECRET"},
    }

    with caplog.at_level(logging.DEBUG):
        await pipeline.analyze(SourceDocument(b"%PDF", "application/pdf"), provider, options)

    assert "Ferritin 12 ng/mL" in caplog.text
    assert "sk-live-SECRET" not in caplog.text

    sending = [r for r in caplog.records if r.getMessage().startswith("Sending")]
    assert len(sending) == 1
    for formatter in (RedactingFormatter(), JsonFormatter()):
        line = formatter.format(sending[0])
        assert "sk-live-SECRET" not in line
        assert "***" in line
    # Provider still receives the real credential
    assert provider.calls[0][1]["api_key"] == "sk-live-SECRET"


@pytest.mark.asyncio
async def test_analyze_with_openai_requires_key(monkeypatch, hemoglobin_pdf):
    post = AsyncMock()
    monkeypatch.setattr(ChatCompletionProvider, "_post", post)

    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        await analyze_with_openai(hemoglobin_pdf, settings=ProviderSettings(OPENAI_API_KEY=""))

    post.assert_not_called()


@pytest.mark.asyncio
async def test_analyze_with_openai_passes_key(monkeypatch, hemoglobin_pdf, sample_result, chat_envelope):
    post = AsyncMock(return_value=HTTPResponse(200, "OK", chat_envelope(json.dumps(sample_result))))
    monkeypatch.setattr(ChatCompletionProvider, "_post", post)

    result = await analyze_with_openai(
        hemoglobin_pdf,
        settings=ProviderSettings(OPENAI_API_KEY="sk-from-env", OPENAI_MODEL="gpt-4o-mini")
    )

    assert result.to_dict() == sample_result
    assert post.call_args.kwargs["headers"] == {"Authorization": "Bearer sk-from-env"}
    assert post.call_args.args[1]["model"] == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_analyze_with_inference_endpoint_uses_settings(monkeypatch, hemoglobin_pdf, sample_result):
    post = AsyncMock(return_value=HTTPResponse(200, "OK", json.dumps(sample_result)))
    monkeypatch.setattr(RemoteInferenceProvider, "_post", post)

    result = await analyze_with_inference_endpoint(
        hemoglobin_pdf,
        settings=ProviderSettings(INFERENCE_ENDPOINT="http://models.internal/analyze")
    )

    assert result.to_dict() == sample_result
    assert post.call_args.args[0] == "http://models.internal/analyze"
