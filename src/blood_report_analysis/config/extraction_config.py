# ============================================================================
# src/blood_report_analysis/config/extraction_config.py
# ============================================================================
"""
Extraction Settings
- OCR language
- Tesseract binary location
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ExtractionSettings(BaseSettings):
    OCR_LANGUAGE: str = Field(
        default="eng",
        description="Tesseract language pack used for image OCR"
    )
    TESSERACT_CMD: Optional[str] = Field(
        default=None,
        description="Path to the tesseract binary (default: resolved from PATH)"
    )


extraction_settings = ExtractionSettings()
