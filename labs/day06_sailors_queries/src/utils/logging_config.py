"""
Structured logging for query runs using structlog.

Run-wide fields (pipeline, source) and per-technique fields are bound with
contextvars, so every event logged inside a run carries them.
"""

import logging
import os
import sys
from contextlib import contextmanager

import structlog


def resolve_level(level: str | None) -> str:
    """Use $LOG_LEVEL when level is unset or an uninterpolated ${VAR}."""
    if level is None or level.startswith("${"):
        level = os.environ.get("LOG_LEVEL", "INFO")
    return level.upper()


def setup_logging(level: str | None = None, structured: bool = False) -> None:
    """
    Configure logging for the lab.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Uses $LOG_LEVEL if None.
        structured: Render JSON lines instead of colored console output
    """
    level = resolve_level(level)
    numeric_level = getattr(logging, level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if structured
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@contextmanager
def log_context(**values):
    """
    Bind values to every log event emitted inside the block.

    Usage:
        with log_context(technique="join"):
            logger.info("query_completed", query="q1")  # carries technique="join"
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a logger instance, bound to a module name when one is given.
    """
    if name:
        return structlog.get_logger().bind(module=name)
    return structlog.get_logger()
