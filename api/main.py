# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for Blood Report Analysis

Thin HTTP surface over the analysis pipeline: accepts one uploaded file,
runs it through the pipeline and returns the AnalysisResult or an error.
Nothing is stored.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from blood_report_analysis.config import logging_settings, provider_settings
from blood_report_analysis.core.document import (
    SUPPORTED_MEDIA_TYPES,
    SourceDocument,
    normalize_media_type,
)
from blood_report_analysis.core.orchestrator import (
    analyze_with_inference_endpoint,
    analyze_with_openai,
)
from blood_report_analysis.extractors import setup_ocr_engine
from blood_report_analysis.utils.exceptions import (
    ConfigurationError,
    ExtractionError,
    ProviderError,
    ValidationError,
)
from blood_report_analysis.utils.logging import setup_logging

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = (
    "The analysis provider's rate limit was reached. "
    "Please wait a minute and try again."
)
GENERIC_FAILURE_MESSAGE = "There was an error analyzing your blood report. Please try again."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """One-time process setup before the first request."""
    setup_logging(
        level=logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_FORMAT_JSON
    )
    setup_ocr_engine()
    logger.info("OCR engine configured")
    yield


app = FastAPI(
    title="Blood Report Analysis API",
    description="Extracts text from blood test reports and returns a structured analysis",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/api/health")
async def health():
    """Health check for monitoring."""
    return {"status": "healthy"}


@app.post("/api/analyze")
async def analyze(
    file: UploadFile = File(...),
    backend: Optional[str] = Query(default=None, description="'openai' or 'inference'")
) -> Dict[str, Any]:
    """
    Analyze one blood report (PDF, PNG or JPEG).

    Returns the validated AnalysisResult as JSON.
    """
    media_type = normalize_media_type(file.content_type)
    if media_type not in SUPPORTED_MEDIA_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported file type: {file.content_type}. Upload a PDF, PNG or JPEG."
        )

    doc = SourceDocument(
        data=await file.read(),
        media_type=media_type,
        filename=file.filename
    )

    backend = (backend or provider_settings.ANALYSIS_BACKEND).lower()

    try:
        if backend == "openai":
            result = await analyze_with_openai(doc)
        elif backend == "inference":
            result = await analyze_with_inference_endpoint(doc)
        else:
            raise HTTPException(status_code=400, detail=f"Unknown backend: {backend}")

    except ExtractionError as e:
        logger.warning(f"Extraction failed for {file.filename}: {e}")
        raise HTTPException(status_code=422, detail=f"Could not read document: {e}")

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    except ProviderError as e:
        if e.is_rate_limited:
            raise HTTPException(status_code=429, detail=RATE_LIMIT_MESSAGE)
        logger.error(f"Provider failed: {e}")
        raise HTTPException(status_code=502, detail=GENERIC_FAILURE_MESSAGE)

    except ValidationError as e:
        logger.error(f"Provider returned an invalid analysis: {e}")
        raise HTTPException(status_code=502, detail=GENERIC_FAILURE_MESSAGE)

    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
