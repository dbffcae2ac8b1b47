"""structlog setup for telepoll.

Events go to stderr so ``telepoll poll`` can keep stdout for updates.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Any

import structlog

_BOT_URL_TOKEN_RE = re.compile(r"bot\d+:[A-Za-z0-9_-]+")
_BARE_TOKEN_RE = re.compile(r"\b\d+:[A-Za-z0-9_-]{10,}\b")

LEVELS: dict[str, int] = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
    "critical": 50,
}

_floor = LEVELS["info"]


def _parse_level(name: str | None) -> int:
    if not name:
        return LEVELS["info"]
    return LEVELS.get(name.strip().lower(), LEVELS["info"])


def _below_floor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    # logger.exception() reports at error level
    name = "error" if method_name == "exception" else method_name
    if LEVELS.get(name, 0) < _floor:
        raise structlog.DropEvent
    return event_dict


def redact_text(value: str) -> str:
    value = _BOT_URL_TOKEN_RE.sub("bot[REDACTED]", value)
    return _BARE_TOKEN_RE.sub("[REDACTED_TOKEN]", value)


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return {key: _redact(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact(item) for item in value]
    return value


def _redact_tokens(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    return _redact(event_dict)


class _CurrentStderr:
    """Writes to whatever ``sys.stderr`` is at the time of the call."""

    def write(self, message: str) -> int:
        return sys.stderr.write(message)

    def flush(self) -> None:
        sys.stderr.flush()


def get_logger(name: str | None = None) -> Any:
    if name:
        return structlog.get_logger(logger=name)
    return structlog.get_logger()


def setup_logging(
    *, debug: bool = False, cache_logger_on_first_use: bool = True
) -> None:
    """Configure structlog from ``TELEPOLL_LOG_LEVEL``, ``TELEPOLL_LOG_FORMAT``
    (``console`` or ``json``) and ``TELEPOLL_LOG_COLOR``. ``debug`` wins over
    the level variable.
    """
    global _floor

    _floor = LEVELS["debug"] if debug else _parse_level(
        os.environ.get("TELEPOLL_LOG_LEVEL")
    )

    json_format = os.environ.get("TELEPOLL_LOG_FORMAT", "").strip().lower() == "json"
    color = os.environ.get("TELEPOLL_LOG_COLOR")
    if color is None:
        colors = sys.stderr.isatty()
    else:
        colors = color.strip().lower() in {"1", "true", "yes", "on"}

    processors: list[Any] = [
        _below_floor,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            _redact_tokens,
            structlog.processors.JSONRenderer(default=str),
        ]
    else:
        processors += [
            _redact_tokens,
            structlog.dev.ConsoleRenderer(colors=colors),
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(file=_CurrentStderr()),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )
