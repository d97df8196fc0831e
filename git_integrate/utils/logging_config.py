"""
Logging configuration using structlog.

Logs are written to stderr so they never interleave with the progress
lines git-integrate prints on stdout. The bearer token passes through this
process, so every event is run through a redaction processor first.
"""

import re
import sys
from typing import Any

import structlog

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = ("token", "authorization", "password", "secret", "api_key")

SENSITIVE_PATTERNS = [
    (re.compile(r"(bearer|token)\s+[a-zA-Z0-9\-._~+/]+", re.IGNORECASE), rf"\1 {REDACTED}"),
    (re.compile(r"\b(gh[pousr]_[A-Za-z0-9]{20,}|github_pat_[A-Za-z0-9_]{20,})\b"), REDACTED),
    (re.compile(r"(https?://)[^:/@\s]+:[^@\s]+@", re.IGNORECASE), rf"\1{REDACTED}@"),
]


def redact_sensitive_data(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask credentials in log events.

    Values under a sensitive key are replaced outright; other string values
    have token-like substrings masked.
    """
    for key, value in event_dict.items():
        if not isinstance(value, str):
            continue
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = REDACTED
            continue
        for pattern, replacement in SENSITIVE_PATTERNS:
            value = pattern.sub(replacement, value)
        event_dict[key] = value
    return event_dict


def configure_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structured logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON lines instead of human-readable console output
    """
    renderer: Any = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_sensitive_data,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

