"""structlog setup for the kubeimport CLI.

Every event is one JSON object on stderr, so ``kubeimport catalog -o json``
keeps stdout clean for piping.  Loggers are bound with a ``component`` such
as ``resolver.loader`` or ``catalog.builder``.  The httpx and httpcore
loggers are held at WARNING because discovery issues one request per API
group.
"""

from __future__ import annotations

import logging
import sys

import structlog

# stdlib loggers of third-party clients that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(level: str = "info") -> None:
    """Configure structlog and quiet the HTTP client loggers."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
