# ============================================================================
# src/blood_report_analysis/config/provider_config.py
# ============================================================================
"""
Provider Configuration
- Backend selection
- Chat-completion credential, model and URL
- Remote inference endpoint
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class ProviderSettings(BaseSettings):
    ANALYSIS_BACKEND: str = Field(
        default="openai",
        description="Provider backend: 'openai' (chat completion) or 'inference' (HTTP endpoint)"
    )
    OPENAI_API_KEY: Optional[SecretStr] = Field(
        default=None,
        description="Bearer credential for the chat-completion endpoint"
    )
    OPENAI_MODEL: str = Field(
        default="gpt-3.5-turbo",
        description="Chat-completion model identifier"
    )
    OPENAI_CHAT_URL: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        description="Chat-completion endpoint URL"
    )
    INFERENCE_ENDPOINT: str = Field(
        default="http://localhost:11434/api/analyze",
        description="Remote inference endpoint accepting {prompt, ...options}"
    )

    def get_api_key(self) -> Optional[str]:
        """Plain credential value, or None when unset or blank."""
        if self.OPENAI_API_KEY is None:
            return None
        value = self.OPENAI_API_KEY.get_secret_value().strip()
        return value or None


provider_settings = ProviderSettings()
