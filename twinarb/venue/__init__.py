"""Venue collaborators: interfaces and the in-memory paper venue."""

from .base import Market, Atomic, Wallet
from .paper import PaperVenue
from .snapshot import load_snapshot, parse_orders

__all__ = [
    "Market",
    "Atomic",
    "Wallet",
    "PaperVenue",
    "load_snapshot",
    "parse_orders",
]
