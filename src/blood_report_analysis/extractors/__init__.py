# ============================================================================
# src/blood_report_analysis/extractors/__init__.py
# ============================================================================
"""
Document text extraction: PDF page walking and image OCR.
"""

from .pdf_extractor import PDFTextExtractor
from .ocr_extractor import OCRExtractor, setup_ocr_engine
from .document_extractor import DocumentExtractor, extract_text

__all__ = [
    "PDFTextExtractor",
    "OCRExtractor",
    "setup_ocr_engine",
    "DocumentExtractor",
    "extract_text",
]
