"""
Structured logging setup.

All runtime logging goes through structlog, rendered as JSON lines on
stdout via the standard logging module.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog


def _build_shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure structlog and the root logger.

    Called once per process by the Streamlit page and by example_run.py;
    nothing calls it at import time. Calling it again replaces the root
    handlers.
    """

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

    # urllib3 logs full request lines at DEBUG, PageSpeed API key included.
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_build_shared_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> Any:
    """Structured logger; output format is set by configure_logging at the entry points."""
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_submission_context(*, url: Optional[str] = None, strategy: Optional[str] = None) -> None:
    """Bind per-submission fields; None values are skipped."""
    context = {k: v for k, v in {"url": url, "strategy": strategy}.items() if v is not None}
    structlog.contextvars.bind_contextvars(**context)


def clear_submission_context() -> None:
    structlog.contextvars.unbind_contextvars("url", "strategy")
