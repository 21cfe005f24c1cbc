# ============================================================================
# src/blood_report_analysis/providers/inference_provider.py
# ============================================================================
"""
Remote Inference Provider

Posts the prompt to any HTTP endpoint that answers with an AnalysisResult
JSON body (e.g. a self-hosted open-source model behind a small service).

Request body: {"prompt": <prompt>, **options}
A "headers" option is sent as HTTP headers instead of in the body.
"""

from typing import Any, Dict, Optional

from .base import BaseAnalysisProvider, BackendType
from ..utils.exceptions import ConfigurationError, ProviderError
from ..validators.response_validator import validate_response
from ..validators.schema import AnalysisResult


class RemoteInferenceProvider(BaseAnalysisProvider):
    """
    Provider bound to one inference endpoint.

    Config options:
        endpoint: URL receiving the POST (required)
    """

    def __init__(self, endpoint: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.endpoint = endpoint or self.config.get('inference_endpoint')
        if not self.endpoint:
            raise ConfigurationError("Inference endpoint URL is required")

    @property
    def backend_type(self) -> BackendType:
        return BackendType.INFERENCE

    async def analyze(
        self,
        prompt: str,
        options: Optional[Dict[str, Any]] = None
    ) -> AnalysisResult:
        options = dict(options or {})
        headers = options.pop('headers', None) or {}
        body = {'prompt': prompt, **options}

        self.logger.info(f"Posting analysis request to {self.endpoint}")
        response = await self._post(self.endpoint, body, headers=headers)

        if not response.ok:
            self.logger.error(
                f"Inference endpoint returned {response.status} {response.reason}"
            )
            raise ProviderError(
                f"Inference API error ({response.status}): {response.reason}",
                status=response.status,
                reason=response.reason
            )

        return validate_response(response.text)
