"""Structured logging for gni_exporter.

Logs go to stderr by default so that ``check`` reports on stdout stay clean.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

LOGGER_NAME = "gni_exporter"

_configured_target: str | None = None


def _handler_for(filename: str | Path | None) -> logging.Handler:
    if filename:
        return logging.FileHandler(str(filename), encoding="utf-8")
    return logging.StreamHandler(sys.stderr)


def setup_logging(filename: str | Path | None = None, *, level: int = logging.INFO) -> structlog.BoundLogger:
    """Configure structlog once per log destination.

    The default stderr setup leaves existing root handlers alone. Passing a
    ``filename`` replaces them so records are redirected to that file. Calling
    with the same destination again is a no-op.

    Args:
        filename: Optional log file. When empty, records are written to stderr.
        level: Minimum stdlib logging level.

    Returns:
        The ``gni_exporter`` bound logger.
    """
    global _configured_target  # noqa: PLW0603
    target = str(filename) if filename else "<stderr>"
    if target != _configured_target:
        logging.basicConfig(
            level=level,
            handlers=[_handler_for(filename)],
            format="%(message)s",
            force=bool(filename),
        )
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(sort_keys=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )
        _configured_target = target

    return structlog.get_logger(LOGGER_NAME)


logger = setup_logging()
