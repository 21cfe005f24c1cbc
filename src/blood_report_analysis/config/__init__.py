# ============================================================================
# src/blood_report_analysis/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .base_config import load_env_file

# .env must be loaded before any settings instance reads the environment
load_env_file()

from .provider_config import ProviderSettings, provider_settings
from .extraction_config import ExtractionSettings, extraction_settings
from .logging_config import LoggingSettings, logging_settings
