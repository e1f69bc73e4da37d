"""Centralized structlog configuration for the matcher and its scripts."""

import logging

import structlog

from twinarb.exceptions import ConfigError

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_configured = False


def parse_level(level: str) -> int:
    """Map a level name (any case) to its numeric value."""
    try:
        return LEVELS[level.strip().upper()]
    except KeyError:
        raise ConfigError(f"unknown log level: {level!r}") from None


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with the project-standard processor chain.

    Safe to call multiple times; only the first call takes effect.
    """
    global _configured
    if _configured:
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
    )
    _configured = True
