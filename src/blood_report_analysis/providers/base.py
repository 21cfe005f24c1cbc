# ============================================================================
# src/blood_report_analysis/providers/base.py
# ============================================================================
"""
Base Analysis Provider Interface

Defines the contract every analysis backend implements:

    analyze(prompt, options) -> AnalysisResult

Supported backends:
- openai: chat-completion endpoint (bearer credential required)
- inference: arbitrary HTTP inference endpoint

Each call makes exactly one HTTP request on a fresh session. There are no
retries and no client-side timeout; callers wrap the call if they need either.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from enum import Enum
import logging

import aiohttp

from ..utils.exceptions import ProviderError
from ..validators.schema import AnalysisResult


class BackendType(Enum):
    """Supported analysis backends."""
    OPENAI = "openai"        # Chat-completion API
    INFERENCE = "inference"  # Generic HTTP inference endpoint


@dataclass
class HTTPResponse:
    """Status line and body of a provider response."""
    status: int
    reason: str
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class BaseAnalysisProvider(ABC):
    """
    Abstract base class for analysis providers.

    Providers are stateless apart from their configuration.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """Return the backend type."""
        pass

    @abstractmethod
    async def analyze(
        self,
        prompt: str,
        options: Optional[Dict[str, Any]] = None
    ) -> AnalysisResult:
        """
        Send the prompt to the backend and validate its answer.

        Args:
            prompt: Rendered analysis prompt
            options: Backend-specific options (credentials, headers, extra body fields)

        Returns:
            Validated AnalysisResult

        Raises:
            ProviderError: Non-success status, missing content, transport failure
            ConfigurationError: Required option missing
            ValidationError: Response is not a valid AnalysisResult
        """
        pass

    async def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Mapping[str, str]] = None
    ) -> HTTPResponse:
        """
        Issue one JSON POST and return the status and body.

        Raises:
            ProviderError: Connection or transport failure, or a body that
                cannot be decoded as text
        """
        request_headers = {"Content-Type": "application/json"}
        request_headers.update(headers or {})

        timeout = aiohttp.ClientTimeout(total=None)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload, headers=request_headers) as response:
                    body = await response.read()
                    status = response.status
                    reason = response.reason or ""
                    charset = response.charset or "utf-8"
        except aiohttp.ClientError as e:
            self.logger.error(f"Request to {url} failed: {e}")
            raise ProviderError(f"Could not reach {url}: {e}") from e

        try:
            text = body.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            self.logger.error(f"Undecodable response body from {url} ({charset})")
            raise ProviderError(
                f"Response from {url} is not valid {charset} text",
                status=status,
                reason=reason
            ) from e

        return HTTPResponse(status=status, reason=reason, text=text)
