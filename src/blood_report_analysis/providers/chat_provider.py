# ============================================================================
# src/blood_report_analysis/providers/chat_provider.py
# ============================================================================
"""
Chat-Completion Provider

Sends the prompt to an OpenAI-compatible chat-completion endpoint with a
system message restricting the model to JSON output. Temperature is fixed
at 0.2 to keep answers stable across runs.

The credential comes from options["api_key"] and is checked before any
request is made.
"""

import json
from typing import Any, Dict, Optional

from .base import BaseAnalysisProvider, BackendType
from .prompts import JSON_ONLY_SYSTEM_INSTRUCTION
from ..utils.exceptions import ConfigurationError, ProviderError
from ..validators.response_validator import validate_response
from ..validators.schema import AnalysisResult


DEFAULT_CHAT_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
CHAT_TEMPERATURE = 0.2

NO_CONTENT = "no content returned"


class ChatCompletionProvider(BaseAnalysisProvider):
    """
    Chat-completion analysis provider.

    Config options:
        openai_model: Model name (default: gpt-3.5-turbo)
        openai_chat_url: Endpoint URL (default: OpenAI chat completions)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.url = self.config.get('openai_chat_url') or DEFAULT_CHAT_URL
        self._model_name = self.config.get('openai_model') or DEFAULT_CHAT_MODEL

    @property
    def backend_type(self) -> BackendType:
        return BackendType.OPENAI

    @property
    def model_name(self) -> str:
        return self._model_name

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": JSON_ONLY_SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "temperature": CHAT_TEMPERATURE,
        }

    async def analyze(
        self,
        prompt: str,
        options: Optional[Dict[str, Any]] = None
    ) -> AnalysisResult:
        api_key = (options or {}).get('api_key')
        if not api_key:
            raise ConfigurationError("Chat-completion API key is required.")

        headers = {"Authorization": f"Bearer {api_key}"}

        self.logger.info(f"Requesting chat completion from {self._model_name}")
        response = await self._post(self.url, self.build_payload(prompt), headers=headers)

        if not response.ok:
            self.logger.error(
                f"Chat-completion API returned {response.status} {response.reason}"
            )
            raise ProviderError(
                f"OpenAI API error ({response.status}): {response.reason}",
                status=response.status,
                reason=response.reason
            )

        content = self._extract_content(response.text)
        if not content:
            raise ProviderError(NO_CONTENT, status=response.status, reason=response.reason)

        return validate_response(content)

    def _extract_content(self, body: str) -> Optional[str]:
        """First choice's message content from a chat-completion envelope."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            self.logger.warning("Chat-completion response is not JSON")
            return None

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None

        return content if isinstance(content, str) else None
