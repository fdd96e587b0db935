"""
Structured logging for keyvault_file.

Components never reach for a module-wide logger on their own: each one accepts
an injected structlog logger and falls back to ``get_logger`` only when the
caller supplies none. ``configure_logging`` is an opt-in helper for
applications that do not already configure structlog.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog

_DEFAULT_LEVEL = "info"
LIBRARY_LOGGER = "keyvault_file"

# Handler installed by configure_logging, replaced on reconfiguration
_handler: logging.Handler | None = None

_MASK = "****"

# Keys whose values must never reach a log sink
SECRET_KEYS = frozenset(
    {
        "api_secret",
        "api-secret",
        "aws_secret_access_key",
        "secretAccessKey",
    }
)
# Keys that are shown truncated
PARTIAL_KEYS = frozenset({"api_key", "api-key", "aws_access_key_id", "accessKeyId"})


def mask_value(key: str, value: Any) -> Any:
    """Mask a single configuration value based on its key."""
    if value is None:
        return None
    if key in SECRET_KEYS:
        return _MASK
    if key in PARTIAL_KEYS:
        text = str(value)
        return f"{text[:4]}{_MASK}" if len(text) > 4 else _MASK
    return value


def redact_mapping(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with credential values masked (recursively)."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            result[key] = redact_mapping(value)
        else:
            result[key] = mask_value(key, value)
    return result


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor masking credentials anywhere in the event dict."""
    return redact_mapping(event_dict)


def configure_logging(level: str | None = None, json: bool = False) -> None:
    """
    Configure structlog and a stderr handler on the keyvault_file logger.

    The host application's root logger and its handlers are left untouched;
    the keyvault_file logger stops propagating so records are not emitted
    twice. structlog's configuration is process-wide, so applications that
    already configure structlog should not call this.

    Args:
    ----
        level: Log level name (debug, info, warning, error). Defaults to info.
        json: Emit JSON lines instead of the console renderer.

    """
    global _handler

    numeric_level = _level_from_str((level or _DEFAULT_LEVEL).lower())

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    if _handler is not None:
        library_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    library_logger.addHandler(_handler)
    library_logger.setLevel(numeric_level)
    library_logger.propagate = False

    renderer: Any = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            redact_secrets,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``component=name``."""
    return structlog.get_logger(name).bind(component=name)


def _level_from_str(level: str) -> int:
    mapping = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return mapping.get(level, logging.INFO)


__all__ = ["configure_logging", "get_logger", "redact_mapping", "redact_secrets", "mask_value"]
