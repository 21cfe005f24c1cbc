# src/blood_report_analysis/extractors/ocr_extractor.py
"""
OCR Extraction for Images

Runs Tesseract (via pytesseract) on an uploaded image. The image bytes are
written to a temporary file and the engine is pointed at that path; the
file is removed once recognition finishes, successfully or not.

The transcript is returned exactly as Tesseract produced it.
"""

import asyncio
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from ..config import extraction_settings
from ..utils.exceptions import ConfigurationError, ExtractionError


logger = logging.getLogger(__name__)

_engine_configured = False


def setup_ocr_engine(tesseract_cmd: Optional[str] = None, force: bool = False) -> None:
    """
    One-time OCR engine setup. Call before the first recognition.

    Args:
        tesseract_cmd: Path to the tesseract binary (default: settings, then PATH)
        force: Re-apply even if setup already ran
    """
    global _engine_configured

    if _engine_configured and not force:
        return

    cmd = tesseract_cmd or extraction_settings.TESSERACT_CMD
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
        logger.info(f"Tesseract binary set to {cmd}")

    _engine_configured = True


class OCRExtractor:
    """
    Tesseract OCR for image documents.

    The language is fixed per extractor (English unless configured otherwise).
    """

    def __init__(self, language: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.language = language or extraction_settings.OCR_LANGUAGE

    async def extract(self, data: bytes, suffix: str = ".png") -> str:
        """
        Recognize text in image bytes.

        Args:
            data: Raw image bytes
            suffix: File suffix for the temporary image

        Returns:
            Tesseract transcript, verbatim

        Raises:
            ExtractionError: Image cannot be decoded or recognition failed
            ConfigurationError: Tesseract is not installed
        """
        if not data:
            raise ExtractionError("Image document is empty")

        with self.temporary_image(data, suffix) as image_path:
            text = await asyncio.to_thread(self._recognize, image_path)

        self.logger.info(f"OCR extracted {len(text)} chars from image")
        return text

    @contextmanager
    def temporary_image(self, data: bytes, suffix: str = ".png") -> Iterator[Path]:
        """Write image bytes to a temp file, yield its path, always remove it."""
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
            f.write(data)
            temp_path = Path(f.name)

        try:
            yield temp_path
        finally:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass

    def _recognize(self, image_path: Path) -> str:
        try:
            with Image.open(image_path) as image:
                image.verify()
        except (UnidentifiedImageError, OSError) as e:
            raise ExtractionError(f"Unreadable image: {e}") from e

        try:
            return pytesseract.image_to_string(str(image_path), lang=self.language)
        except pytesseract.TesseractNotFoundError as e:
            raise ConfigurationError(
                "Tesseract OCR is not installed or not on PATH. "
                "Install it or set TESSERACT_CMD."
            ) from e
        except pytesseract.TesseractError as e:
            raise ExtractionError(f"OCR failed: {e}") from e
