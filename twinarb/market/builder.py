# twinarb/market/builder.py
"""Group a flat list of open orders into per-pair books."""

from __future__ import annotations

from typing import Iterable

import structlog

from twinarb.exceptions import MarketUnavailable
from twinarb.market.book import Book
from twinarb.market.order import Order

logger = structlog.get_logger()

FIRST_SEEN = "first_seen"
LEXICOGRAPHIC = "lexicographic"
ORIENTATIONS = (FIRST_SEEN, LEXICOGRAPHIC)


def ordered_pair(first: str, second: str) -> tuple[str, str]:
    """Key for a directed token pair. (a, b) and (b, a) are distinct keys."""
    return (first, second)


def build_books(orders: Iterable[Order], orientation: str = FIRST_SEEN) -> list[Book]:
    """Partition orders into books, one per unordered token pair.

    With ``first_seen`` the first order met for a pair fixes its base
    (what that order buys) and quote, so the same pair may come out
    inverted from one cycle to the next. ``lexicographic`` always uses the
    smaller token identifier as base.
    """
    if orientation not in ORIENTATIONS:
        raise ValueError(f"unknown orientation: {orientation}")

    books: dict[tuple[str, str], Book] = {}
    for order in orders:
        pair_key = ordered_pair(order.buy_token, order.sell_token)
        inverse_key = ordered_pair(order.sell_token, order.buy_token)

        if orientation == LEXICOGRAPHIC:
            base, quote = sorted(pair_key)
            key = ordered_pair(base, quote)
            book = books.get(key)
            if book is None:
                book = books[key] = Book(base=base, quote=quote)
            if order.buy_token == base:
                book.add_bid(order)
            else:
                book.add_ask(order)
            continue

        bid_book = books.get(pair_key)
        if bid_book is not None:
            bid_book.add_bid(order)
            continue

        ask_book = books.get(inverse_key)
        if ask_book is not None:
            ask_book.add_ask(order)
            continue

        book = Book(base=order.buy_token, quote=order.sell_token)
        book.add_bid(order)
        books[pair_key] = book

    return list(books.values())


async def get_books(market, orientation: str = FIRST_SEEN) -> list[Book]:
    """Fetch all open orders from ``market`` and build this cycle's books."""
    try:
        orders = list(await market.orders())
    except MarketUnavailable:
        raise
    except Exception as exc:
        raise MarketUnavailable(f"could not retrieve orders from market ({exc})") from exc

    books = build_books(orders, orientation=orientation)
    logger.debug("books_built", orders=len(orders), books=len(books))
    return books
