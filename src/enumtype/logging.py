"""Structured logging configuration using structlog.

Loggers from ``get_logger`` emit through the stdlib ``enumtype.<name>``
loggers, which carry a ``NullHandler``: nothing is printed unless the host
configures ``logging`` or calls ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys

import structlog

from enumtype.config import get_settings

PACKAGE_LOGGER = "enumtype"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str | None = None, *, json: bool | None = None) -> None:
    """Configure structlog + stdlib logging for enumtype.

    ``level`` defaults to ``Settings.log_level``. Output goes to stderr and is
    JSON unless stderr is a terminal or ``json`` says otherwise.
    """
    if level is None:
        level = get_settings().log_level.value
    if json is None:
        json = not sys.stderr.isatty()
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a lazy logger backed by the stdlib ``enumtype.<name>`` logger.

    A ``name`` is carried as the ``logger_name`` key.
    """
    if name is None:
        return structlog.wrap_logger(logging.getLogger(PACKAGE_LOGGER))  # type: ignore[return-value]
    return structlog.wrap_logger(  # type: ignore[return-value]
        logging.getLogger(f"{PACKAGE_LOGGER}.{name}"), logger_name=name,
    )
