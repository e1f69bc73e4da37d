"""Utility modules for twinarb.

Sub-modules:
- logging: configure_logging() for structlog setup
"""

from .logging import configure_logging, parse_level

__all__ = [
    "configure_logging",
    "parse_level",
]
