"""Structured logging setup using structlog.

Log values that carry chat text are cleaned before rendering: components are
shown as their plain text and stray ``§`` codes are stripped, so console and
JSON output never contain raw formatting markers.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable

import structlog

from chattext.text.component import TextComponent

_LEGACY_CODE_RE = re.compile(r"§[0-9a-fk-or]", re.IGNORECASE)

_SECRET_RE = re.compile(
    r"(token|key|secret|password)[\"']?\s*[:=]\s*[\"']?[\w\-\.]+", re.IGNORECASE
)

# Libraries that log every statement at DEBUG
_NOISY_LOGGERS = ("aiosqlite", "asyncio")


def _clean_chat_text(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in list(event_dict.items()):
        if isinstance(value, TextComponent):
            event_dict[key] = value.unformatted_text
        elif isinstance(value, str) and "§" in value:
            event_dict[key] = _LEGACY_CODE_RE.sub("", value)
    return event_dict


def _redact_secrets(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in list(event_dict.items()):
        if isinstance(value, str) and _SECRET_RE.search(value):
            event_dict[key] = _SECRET_RE.sub(r"\1=***REDACTED***", value)
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    quiet: Iterable[str] = _NOISY_LOGGERS,
) -> None:
    """Route structlog and stdlib logging through one stderr handler."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if numeric_level <= logging.DEBUG:
        print(
            "WARNING: DEBUG logging is enabled. Message text will appear in logs.",
            file=sys.stderr,
        )

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _clean_chat_text,
        _redact_secrets,
    ]

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
