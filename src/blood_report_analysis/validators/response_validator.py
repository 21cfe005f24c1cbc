# ============================================================================
# src/blood_report_analysis/validators/response_validator.py
# ============================================================================
"""
Response Validator

Turns raw provider output into an AnalysisResult.

Parsing (string input only):
1. Direct JSON parse
2. Greedy brace span: first '{' to last '}' - recovers JSON wrapped in prose
   ("Sure! Here is the result: {...}")
3. Otherwise: ValidationError("malformed response")

The brace span is a heuristic. Prose containing several JSON-like spans,
or braces after the payload, produces an unparseable span and is rejected.
"""

import json
import logging
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from ..utils.exceptions import ValidationError
from .schema import AnalysisResult


logger = logging.getLogger(__name__)

MALFORMED_RESPONSE = "malformed response"


def parse_response(raw: str) -> Any:
    """
    Parse provider text as JSON, recovering from surrounding prose.

    Raises:
        ValidationError: No parseable JSON found
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError, RecursionError):
        pass

    text = raw or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        logger.warning("No JSON object found in provider response")
        raise ValidationError(MALFORMED_RESPONSE)

    try:
        parsed = json.loads(text[start:end + 1])
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning(f"Embedded JSON span could not be parsed: {e}")
        raise ValidationError(MALFORMED_RESPONSE) from e

    logger.debug("Recovered JSON object from prose-wrapped response")
    return parsed


def _describe_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid value')}"


def validate_response(raw: Union[str, Dict[str, Any]]) -> AnalysisResult:
    """
    Validate provider output against the AnalysisResult schema.

    Args:
        raw: Provider output, either text or an already-decoded object

    Returns:
        AnalysisResult

    Raises:
        ValidationError: Malformed JSON or the first schema violation
    """
    data = parse_response(raw) if isinstance(raw, str) else raw

    if not isinstance(data, dict):
        raise ValidationError(
            f"<root>: expected a JSON object, got {type(data).__name__}"
        )

    try:
        return AnalysisResult.model_validate(data)
    except PydanticValidationError as e:
        message = _describe_error(e)
        logger.warning(f"Provider response failed schema validation: {message}")
        raise ValidationError(message) from e
