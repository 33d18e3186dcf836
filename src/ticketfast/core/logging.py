"""Structured logging configuration.

Uses structlog for structured JSON logging in production and
human-readable console output in development. Every event passes through
``redact_sensitive`` after exception formatting, so credentials never reach
a log sink, whether bound in a raw storage payload or carried in a traceback.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import structlog

from src.ticketfast.config import Environment, get_settings

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_PARTS = ("token", "password", "secret", "key")

_INLINE_SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"token[\"\s:=]+[a-zA-Z0-9_-]{20,}", re.IGNORECASE), f"token={REDACTED}"),
    (re.compile(r"key[\"\s:=]+[a-zA-Z0-9_-]{20,}", re.IGNORECASE), f"key={REDACTED}"),
    (re.compile(r"password[\"\s:=]+[^\s,}]+", re.IGNORECASE), f"password={REDACTED}"),
]


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in _SENSITIVE_KEY_PARTS)


def _scrub_string(value: str) -> str:
    for pattern, replacement in _INLINE_SECRET_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _scrub_value(value: Any) -> Any:
    if isinstance(value, str):
        return _scrub_string(value)
    if isinstance(value, dict):
        return {
            k: REDACTED if isinstance(k, str) and _is_sensitive_key(k) else _scrub_value(v)
            for k, v in value.items()
        }
    return value


def redact_sensitive(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor masking credentials in event keys and values.

    Keys containing token/password/secret/key are replaced wholesale.
    String values (including the event message) are scrubbed for inline
    ``token=...``, ``key=...`` and ``password=...`` fragments. Nested dicts
    are processed one level at a time, recursively.
    """
    for key in list(event_dict.keys()):
        if _is_sensitive_key(key):
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _scrub_value(event_dict[key])
    return event_dict


def configure_structlog() -> None:
    """Configure structlog processors based on environment."""
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_sensitive,
    ]

    if settings.ENVIRONMENT == Environment.production:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
