#!/usr/bin/env python3
"""
Analyze a Blood Report from the Command Line

Runs one PDF or image through the analysis pipeline and prints the
AnalysisResult as JSON.

Usage:
    python scripts/analyze_report.py report.pdf
    python scripts/analyze_report.py scan.png --backend inference
    python scripts/analyze_report.py report.pdf --endpoint http://localhost:8080/analyze
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from blood_report_analysis.config import logging_settings
from blood_report_analysis.core.document import SourceDocument
from blood_report_analysis.core.orchestrator import (
    analyze_with_inference_endpoint,
    analyze_with_openai,
)
from blood_report_analysis.extractors import setup_ocr_engine
from blood_report_analysis.utils.exceptions import ProviderError, ReportAnalysisError
from blood_report_analysis.utils.logging import setup_logging


async def run(args: argparse.Namespace) -> int:
    doc = await SourceDocument.read(Path(args.file), media_type=args.media_type)

    try:
        if args.backend == "openai":
            result = await analyze_with_openai(doc)
        else:
            result = await analyze_with_inference_endpoint(doc, endpoint=args.endpoint)
    except ProviderError as e:
        if e.is_rate_limited:
            print("Rate limit reached. Wait a minute and try again.", file=sys.stderr)
        else:
            print(f"Provider error: {e}", file=sys.stderr)
        return 2
    except ReportAnalysisError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Analyze a blood test report")
    parser.add_argument("file", type=str, help="PDF, PNG or JPEG report")
    parser.add_argument(
        "--backend", choices=["openai", "inference"], default="openai",
        help="Analysis backend (default: openai)"
    )
    parser.add_argument("--endpoint", type=str, help="Inference endpoint URL (inference backend)")
    parser.add_argument("--media-type", type=str, help="Override the media type guessed from the extension")
    parser.add_argument("--log-level", type=str, default=logging_settings.LOG_LEVEL, help="Logging level")
    args = parser.parse_args()

    if not Path(args.file).exists():
        parser.error(f"File not found: {args.file}")

    setup_logging(level=args.log_level)
    setup_ocr_engine()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
