# tests/market/test_builder.py
from unittest.mock import AsyncMock

import pytest

from twinarb.exceptions import MarketUnavailable
from twinarb.market.builder import LEXICOGRAPHIC, build_books, get_books, ordered_pair
from twinarb.market.order import Order


def order(buy, sell, buy_amount=10, sell_amount=10, oid=""):
    return Order(buy_token=buy, sell_token=sell, buy_amount=buy_amount,
                 sell_amount=sell_amount, order_id=oid)


def drain(book):
    bids, asks = [], []
    while book.bid_count:
        bids.append(book.highest_bid().order_id)
    while book.ask_count:
        asks.append(book.lowest_ask().order_id)
    return sorted(bids), sorted(asks)


def test_ordered_pair_is_directed():
    assert ordered_pair("A", "B") == ("A", "B")
    assert ordered_pair("A", "B") != ordered_pair("B", "A")


def test_first_order_fixes_orientation():
    books = build_books([
        order("B", "A", oid="1"),
        order("A", "B", oid="2"),
        order("B", "A", oid="3"),
    ])
    assert len(books) == 1
    book = books[0]
    assert (book.base, book.quote) == ("B", "A")
    assert drain(book) == (["1", "3"], ["2"])


def test_orientation_follows_input_order():
    forward = build_books([order("A", "B", oid="1"), order("B", "A", oid="2")])[0]
    reverse = build_books([order("B", "A", oid="2"), order("A", "B", oid="1")])[0]
    assert (forward.base, forward.quote) == ("A", "B")
    assert (reverse.base, reverse.quote) == ("B", "A")


def test_every_order_lands_in_exactly_one_book():
    orders = [
        order("A", "B", oid="1"),
        order("C", "D", oid="2"),
        order("B", "A", oid="3"),
        order("D", "C", oid="4"),
        order("A", "C", oid="5"),
        order("C", "A", oid="6"),
        order("D", "C", oid="7"),
    ]
    books = build_books(orders)
    assert len(books) == 3
    seen = []
    for book in books:
        bids, asks = drain(book)
        seen.extend(bids + asks)
    assert sorted(seen) == [str(i) for i in range(1, 8)]


def test_lexicographic_orientation_is_input_independent():
    orders = [order("B", "A", oid="1"), order("A", "B", oid="2")]
    for batch in (orders, list(reversed(orders))):
        book = build_books(batch, orientation=LEXICOGRAPHIC)[0]
        assert (book.base, book.quote) == ("A", "B")
        assert drain(book) == (["2"], ["1"])


def test_unknown_orientation_rejected():
    with pytest.raises(ValueError):
        build_books([], orientation="random")


def test_empty_input_gives_no_books():
    assert build_books([]) == []


@pytest.mark.asyncio
async def test_get_books_fetches_from_market():
    market = AsyncMock()
    market.orders.return_value = [order("A", "B"), order("B", "A")]
    books = await get_books(market)
    assert len(books) == 1
    market.orders.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_books_wraps_market_errors():
    market = AsyncMock()
    market.orders.side_effect = ConnectionError("node down")
    with pytest.raises(MarketUnavailable, match="node down"):
        await get_books(market)
