# ============================================================================
# src/blood_report_analysis/utils/logging.py
# ============================================================================
"""
Logging configuration and utilities for the report analysis pipeline.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from datetime import datetime, timezone
import json


# Key suffixes whose values must never reach a log line
SENSITIVE_KEY_SUFFIXES = (
    "apikey",
    "authorization",
    "token",
    "password",
    "secret",
)

REDACTED = "***"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        format_json: Whether to use JSON format
    """
    log_level = getattr(logging, level.upper())

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = RedactingFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )


class RedactingFormatter(logging.Formatter):
    """
    Text formatter for pipeline records.

    Records may carry provider options as `extra={"options": ...}`; they are
    appended to the line with credential values masked.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        options = getattr(record, "options", None)
        if isinstance(options, Mapping):
            message = f"{message} options={redact_options(options)}"
        return message


class JsonFormatter(logging.Formatter):
    """JSON log formatter. Provider options are emitted redacted."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        options = getattr(record, "options", None)
        if isinstance(options, Mapping):
            log_data['options'] = redact_options(options)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def is_sensitive_key(key: str) -> bool:
    normalized = key.lower().replace("-", "").replace("_", "")
    return normalized.endswith(SENSITIVE_KEY_SUFFIXES)


def redact_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Copy of provider options safe to log.

    Credential-like values are replaced with a fixed marker, including
    inside nested mappings such as HTTP headers.
    """
    if not options:
        return {}

    redacted = {}
    for key, value in options.items():
        if is_sensitive_key(str(key)):
            redacted[key] = REDACTED
        elif isinstance(value, Mapping):
            redacted[key] = redact_options(value)
        else:
            redacted[key] = value
    return redacted
