# src/blood_report_analysis/extractors/pdf_extractor.py
"""
PDF Text Extraction

Walks the pages of a PDF in declared order and flattens each page's
words into one line of text:

    page 1 words joined by ' '
    page 2 words joined by ' '
    ...

Pages are joined with a newline, so an N-page document always yields
N lines. A page without text contributes an empty line.
"""

import asyncio
import io
import logging
from typing import List

import pdfplumber

from ..utils.exceptions import ExtractionError


class PDFTextExtractor:
    """
    pdfplumber-based page walker.

    Parsing and per-page word retrieval are blocking, so each step runs
    in a worker thread and the caller's event loop stays responsive.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def extract(self, data: bytes) -> str:
        """
        Extract text from PDF bytes.

        Args:
            data: Raw PDF bytes

        Returns:
            Page texts joined by newlines

        Raises:
            ExtractionError: Corrupt/unreadable PDF or a PDF with no pages
        """
        pdf = await asyncio.to_thread(self._open, data)

        try:
            page_count = len(pdf.pages)
            if page_count == 0:
                raise ExtractionError("PDF contains no pages")

            page_texts: List[str] = []
            for page in pdf.pages:
                page_texts.append(await asyncio.to_thread(self._page_text, page))

        finally:
            pdf.close()

        self.logger.info(f"Extracted text from {page_count} PDF page(s)")
        return "\n".join(page_texts)

    def _open(self, data: bytes) -> pdfplumber.PDF:
        if not data:
            raise ExtractionError("PDF document is empty")
        try:
            pdf = pdfplumber.open(io.BytesIO(data))
        except Exception as e:
            raise ExtractionError(f"Could not parse PDF: {e}") from e

        try:
            # Force page-tree parsing so corrupt documents fail here
            len(pdf.pages)
        except Exception as e:
            pdf.close()
            raise ExtractionError(f"Could not parse PDF: {e}") from e
        return pdf

    def _page_text(self, page) -> str:
        try:
            words = page.extract_words()
        except Exception as e:
            raise ExtractionError(
                f"Could not read text on page {page.page_number}: {e}"
            ) from e

        return " ".join(word["text"] for word in words)
