"""Custom exceptions for the twinarb matching engine."""


class TwinArbError(Exception):
    """Base exception for all twinarb errors."""


class ConfigError(TwinArbError):
    """Missing or invalid configuration."""


class InvalidOrder(TwinArbError):
    """Order rejected at ingestion (zero buy amount, negative amounts, ...)."""


class MarketUnavailable(TwinArbError):
    """Open orders could not be retrieved from the market."""


class BookError(TwinArbError):
    """A condition that ends processing of the remaining book."""


class EmptyBook(BookError):
    """No bid or ask left to extract. Normal termination, not a fault."""


class TokenMismatch(BookError):
    """Extracted bid and ask disagree on the base/quote tokens."""


class BalanceUnavailable(BookError):
    """Available balance for a token could not be queried."""


class ZeroTradable(BookError):
    """Neither side of the pair leaves a tradable amount."""


class ExecutionError(BookError):
    """Atomic settlement of a twin was rejected."""
