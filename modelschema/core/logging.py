from __future__ import annotations

import logging
import sys
from typing import Any

# structlog must be imported before its typing helpers
import structlog
from structlog.types import Processor

__all__: list[str] = [
    "configure_logging",
    "bind_synthesis_context",
    "clear_synthesis_context",
]


def _ensure_synthesis_context(
    logger: Any,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Guarantee the *root_type* key exists in *event_dict*."""

    event_dict.setdefault("root_type", None)
    return event_dict


# The helper runs *after* ``merge_contextvars`` so it only fills in missing keys.
_JSON_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    _ensure_synthesis_context,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.JSONRenderer(),
]


def _configure_stdlib_logging(level: int) -> None:
    """Route the built-in *logging* module to *stderr* with a bare formatter.

    Host applications frequently still log through the stdlib; structlog
    renders its own records, so the formatter only passes the message through.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))  # structlog formats

    root_logger.handlers.clear()
    root_logger.addHandler(handler)


_LOGGING_CONFIGURED: bool = False


def configure_logging(debug: bool = False) -> None:
    """Initialise `structlog` for the entire process.

    The library never calls this itself; host applications and scripts call
    it once at start-up.  The function is idempotent – multiple calls are
    safe but no-op after the first.

    Parameters
    ----------
    debug:
        When *True* lowers the log level to ``DEBUG`` (per-model events);
        otherwise ``INFO`` (one event per synthesis run).
    """

    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    level: int = logging.DEBUG if debug else logging.INFO

    _configure_stdlib_logging(level)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        processors=_JSON_PROCESSORS,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _LOGGING_CONFIGURED = True


def bind_synthesis_context(root_type: str) -> None:
    """Bind *root_type* so every event of the current run carries it."""

    structlog.contextvars.bind_contextvars(root_type=root_type)


def clear_synthesis_context() -> None:
    """Drop the run-scoped context bound by :func:`bind_synthesis_context`."""

    structlog.contextvars.unbind_contextvars("root_type")
