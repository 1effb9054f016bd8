"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules. Secret values must
never reach the log output, so a redaction processor runs before rendering.
"""

import logging
import re
import sys
from typing import Any

import structlog

from extsecret.shared.infrastructure.config import settings

REDACTED = "[REDACTED]"

# Event fields that carry secret material
SENSITIVE_KEYS = frozenset({"value", "values", "password", "secret_value", "token", "hash"})

_INLINE_PATTERNS = {
    r"(password|token|secret_value)['\"]?\s*[:=]\s*['\"]?([^'\"\s,]+)": r"\1=" + REDACTED,
    r"Bearer\s+\S+": "Bearer " + REDACTED,
}


def _redact_string(text: str) -> str:
    for pattern, replacement in _INLINE_PATTERNS.items():
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
    return text


def _redact(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, str):
        return _redact_string(value)
    if isinstance(value, dict):
        return {k: _redact(str(k), v) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact_string(i) if isinstance(i, str) else i for i in value]
    return value


def secret_redactor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Mask secret material in log events.

    Fields named like a secret (value, password, token, ...) are replaced
    outright; other strings have inline ``password=...`` style fragments masked.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Redacted event dictionary
    """
    if not getattr(settings, "log_redaction_enabled", True):
        return event_dict

    return {k: (v if k == "event" else _redact(k, v)) for k, v in event_dict.items()}


def configure_logging(stream: Any = sys.stderr) -> None:
    """
    Configure structlog for the application.

    Sets up:
    - Pretty console output for development
    - JSON output otherwise
    - Log level from settings
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        secret_redactor,
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty() if hasattr(stream, "isatty") else False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("secret_not_found", secret="db", namespace="jx")
    """
    return structlog.get_logger(name)
