# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import io
import json

import pytest

from blood_report_analysis.core.document import SourceDocument
from blood_report_analysis.providers.base import HTTPResponse


@pytest.fixture
def sample_result():
    """Schema-conforming analysis result as a provider would return it"""
    return {
        "keyFindings": ["Hemoglobin within normal range"],
        "supplements": [
            {"name": "Iron", "reason": "borderline low", "priority": "low"}
        ],
        "healthStatus": "good",
        "summary": "All normal."
    }


@pytest.fixture
def full_result():
    """Analysis result with every optional field present"""
    return {
        "bloodType": "O+",
        "keyFindings": ["Ferritin low", "Vitamin D insufficient"],
        "supplements": [
            {
                "name": "Iron bisglycinate",
                "reason": "Ferritin 12 ng/mL",
                "dosage": "25 mg daily",
                "priority": "high"
            },
            {
                "name": "Vitamin D3",
                "reason": "25-OH vitamin D 22 ng/mL",
                "dosage": "2000 IU daily",
                "priority": "medium"
            }
        ],
        "healthStatus": "attention",
        "summary": "Low iron stores and insufficient vitamin D."
    }


@pytest.fixture
def make_pdf():
    """
    Build PDF bytes with reportlab.

    Each entry is one page; a page is a list of lines. An empty list
    produces a blank page.
    """
    from reportlab.pdfgen import canvas
    from reportlab.lib.pagesizes import letter

    def _make(pages):
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=letter)
        for lines in pages:
            y = 750
            for line in lines:
                c.drawString(100, y, line)
                y -= 50
            c.showPage()
        c.save()
        return buffer.getvalue()

    return _make


@pytest.fixture
def hemoglobin_pdf(make_pdf):
    """One-page lab report PDF"""
    return SourceDocument(
        data=make_pdf([["Hemoglobin 13.5 g/dL"]]),
        media_type="application/pdf",
        filename="report.pdf"
    )


@pytest.fixture
def png_bytes():
    """Small valid PNG image"""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def ok_response():
    """Build a 200 HTTPResponse from a JSON-serializable body"""
    def _make(body):
        text = body if isinstance(body, str) else json.dumps(body)
        return HTTPResponse(status=200, reason="OK", text=text)
    return _make


@pytest.fixture
def chat_envelope():
    """Wrap content in a chat-completion response envelope"""
    def _make(content):
        return json.dumps({
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop"
                }
            ]
        })
    return _make


@pytest.fixture
def sample_lab_text():
    """Sample lab report text for testing"""
    return """
    Quest Diagnostics Laboratory Report

    COMPLETE BLOOD COUNT (CBC)

    Test                Result      Reference Range    Flag
    ----------------------------------------------------------------
    WBC                 7.2         4.5-11.0 K/uL
    RBC                 4.8         4.5-5.5 M/uL
    Hemoglobin          14.2        13.5-17.5 g/dL
    Hematocrit          42.1        38.8-50.0 %
    Platelets           245         150-400 K/uL
    """
