"""Configuration validators."""

import re

from twinarb.exceptions import ConfigError
from twinarb.utils.logging import parse_level

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_market_address(address: str | None = None) -> str:
    """Raise ConfigError unless the market address is a 20-byte hex address."""
    if address is None:
        from config.settings import settings
        address = settings.MARKET_ADDRESS
    if not address:
        raise ConfigError("MARKET_ADDRESS is required")
    if not _ADDRESS_RE.match(address):
        raise ConfigError(f"MARKET_ADDRESS is not a valid address: {address!r}")
    return address


def validate_log_level(level: str | None = None) -> str:
    """Raise ConfigError if the log level name is unknown."""
    if level is None:
        from config.settings import settings
        level = settings.LOG_LEVEL
    parse_level(level)
    return level.upper()
