# ============================================================================
# FILE: tests/unit/test_pdf_extraction.py
# ============================================================================
"""
Unit tests for PDF text extraction
"""

import pytest
from unittest.mock import MagicMock, PropertyMock, patch

from blood_report_analysis.extractors.pdf_extractor import PDFTextExtractor
from blood_report_analysis.utils.exceptions import ExtractionError


@pytest.mark.asyncio
async def test_single_page_text(make_pdf):
    """Words on a page are joined by single spaces"""
    extractor = PDFTextExtractor()
    text = await extractor.extract(make_pdf([["Hemoglobin 13.5 g/dL"]]))

    assert text == "Hemoglobin 13.5 g/dL"


@pytest.mark.asyncio
async def test_multi_line_page_is_one_segment(make_pdf):
    """Several lines on one page collapse into a single line of text"""
    extractor = PDFTextExtractor()
    text = await extractor.extract(make_pdf([["Page 1 Content", "Test: Value 1"]]))

    assert "\n" not in text
    assert text == "Page 1 Content Test: Value 1"


@pytest.mark.asyncio
async def test_pages_joined_in_order(make_pdf):
    """N pages yield N newline-separated segments in document order"""
    pages = [
        ["Page 1 Content"],
        ["Page 2 Content"],
        ["Page 3 Content"],
    ]
    extractor = PDFTextExtractor()
    text = await extractor.extract(make_pdf(pages))

    segments = text.split("\n")
    assert len(segments) == 3
    assert segments == ["Page 1 Content", "Page 2 Content", "Page 3 Content"]


@pytest.mark.asyncio
async def test_blank_page_gives_empty_line(make_pdf):
    """A page without text is an empty segment, not an error"""
    extractor = PDFTextExtractor()
    text = await extractor.extract(make_pdf([["First"], [], ["Third"]]))

    assert text == "First\n\nThird"


@pytest.mark.asyncio
async def test_extraction_is_stable(make_pdf):
    """Re-running on the same bytes yields identical text"""
    data = make_pdf([["WBC 7.2 K/uL"], ["Platelets 245 K/uL"]])
    extractor = PDFTextExtractor()

    first = await extractor.extract(data)
    second = await extractor.extract(data)

    assert first == second


@pytest.mark.asyncio
async def test_corrupt_pdf_raises():
    """Bytes that are not a PDF fail with ExtractionError"""
    extractor = PDFTextExtractor()

    with pytest.raises(ExtractionError):
        await extractor.extract(b"this is definitely not a pdf document")


@pytest.mark.asyncio
async def test_empty_bytes_raise():
    extractor = PDFTextExtractor()

    with pytest.raises(ExtractionError):
        await extractor.extract(b"")


@pytest.mark.asyncio
async def test_zero_page_pdf_raises_and_closes():
    """A document with no pages is rejected and the handle is still closed"""
    fake_pdf = MagicMock()
    fake_pdf.pages = []

    with patch(
        "blood_report_analysis.extractors.pdf_extractor.pdfplumber.open",
        return_value=fake_pdf
    ):
        extractor = PDFTextExtractor()
        with pytest.raises(ExtractionError, match="no pages"):
            await extractor.extract(b"%PDF-1.4 stub")

    fake_pdf.close.assert_called_once()


@pytest.mark.asyncio
async def test_page_read_failure_raises_and_closes():
    bad_page = MagicMock()
    bad_page.page_number = 1
    bad_page.extract_words.side_effect = ValueError("broken content stream")

    fake_pdf = MagicMock()
    fake_pdf.pages = [bad_page]

    with patch(
        "blood_report_analysis.extractors.pdf_extractor.pdfplumber.open",
        return_value=fake_pdf
    ):
        extractor = PDFTextExtractor()
        with pytest.raises(ExtractionError, match="page 1"):
            await extractor.extract(b"%PDF-1.4 stub")

    fake_pdf.close.assert_called_once()


@pytest.mark.asyncio
async def test_broken_page_tree_raises_and_closes():
    fake_pdf = MagicMock()
    type(fake_pdf).pages = PropertyMock(side_effect=KeyError("Pages"))

    with patch(
        "blood_report_analysis.extractors.pdf_extractor.pdfplumber.open",
        return_value=fake_pdf
    ):
        extractor = PDFTextExtractor()
        with pytest.raises(ExtractionError, match="Could not parse PDF"):
            await extractor.extract(b"%PDF-1.4 stub")

    fake_pdf.close.assert_called_once()
