# src/blood_report_analysis/extractors/document_extractor.py
"""
Document Extractor

Routes a SourceDocument to exactly one extraction branch based on its
declared media type:

    application/pdf -> PDFTextExtractor
    image/*         -> OCRExtractor

There is no cross-branch fallback: a PDF that fails to parse is an error,
it is never retried as an image (and vice versa).
"""

import logging
from typing import Optional

from ..core.document import SourceDocument
from ..utils.exceptions import UnsupportedMediaTypeError
from .pdf_extractor import PDFTextExtractor
from .ocr_extractor import OCRExtractor


class DocumentExtractor:
    """Single entry point turning any supported document into plain text."""

    def __init__(
        self,
        pdf_extractor: Optional[PDFTextExtractor] = None,
        ocr_extractor: Optional[OCRExtractor] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.pdf_extractor = pdf_extractor or PDFTextExtractor()
        self._ocr_extractor = ocr_extractor

    @property
    def ocr_extractor(self) -> OCRExtractor:
        """Lazy-load OCR extractor."""
        if self._ocr_extractor is None:
            self._ocr_extractor = OCRExtractor()
        return self._ocr_extractor

    async def extract(self, doc: SourceDocument) -> str:
        """
        Extract plain text from a document.

        Raises:
            ExtractionError: Unparseable document or unsupported media type
        """
        self.logger.debug(
            f"Extracting {doc.filename or 'document'} "
            f"({doc.media_type}, {doc.size} bytes)"
        )

        if doc.is_pdf:
            return await self.pdf_extractor.extract(doc.data)

        if doc.is_image:
            return await self.ocr_extractor.extract(doc.data, suffix=doc.suffix or ".png")

        raise UnsupportedMediaTypeError(doc.media_type)


async def extract_text(doc: SourceDocument) -> str:
    """Convenience wrapper around DocumentExtractor().extract()."""
    return await DocumentExtractor().extract(doc)
