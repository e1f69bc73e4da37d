# twinarb/market/book.py
"""Per-pair order book with best-first extraction."""

from __future__ import annotations

import heapq
import itertools
import math
from fractions import Fraction

from twinarb.exceptions import EmptyBook
from twinarb.market.order import Order


def bid_price(order: Order) -> Fraction:
    """Quote offered per base wanted."""
    return order.rate


def ask_price(order: Order) -> Fraction | float:
    """Quote wanted per base offered; infinite when nothing is offered."""
    price = order.inverse_rate
    return math.inf if price is None else price


class Book:
    """Bids and asks for one token pair.

    Bids buy ``base`` with ``quote``; asks sell ``base`` for ``quote``.
    Both sides are priced in quote per base. Extraction is O(log n) and
    ties keep insertion order.
    """

    def __init__(self, base: str, quote: str) -> None:
        self.base = base
        self.quote = quote
        self._bids: list[tuple[Fraction, int, Order]] = []
        self._asks: list[tuple[Fraction | float, int, Order]] = []
        self._seq = itertools.count()

    def add_bid(self, order: Order) -> None:
        heapq.heappush(self._bids, (-bid_price(order), next(self._seq), order))

    def add_ask(self, order: Order) -> None:
        heapq.heappush(self._asks, (ask_price(order), next(self._seq), order))

    def highest_bid(self) -> Order:
        """Remove and return the bid paying the most quote per base."""
        if not self._bids:
            raise EmptyBook(f"no bids left in {self}")
        return heapq.heappop(self._bids)[2]

    def lowest_ask(self) -> Order:
        """Remove and return the ask charging the least quote per base."""
        if not self._asks:
            raise EmptyBook(f"no asks left in {self}")
        return heapq.heappop(self._asks)[2]

    @property
    def bid_count(self) -> int:
        return len(self._bids)

    @property
    def ask_count(self) -> int:
        return len(self._asks)

    def __len__(self) -> int:
        return len(self._bids) + len(self._asks)

    def __repr__(self) -> str:
        return (f"Book(base={self.base}, quote={self.quote}, "
                f"bids={len(self._bids)}, asks={len(self._asks)})")
