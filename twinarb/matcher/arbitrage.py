# twinarb/matcher/arbitrage.py
"""Crossed-order detection and twin sizing.

Each book is walked best-first: the highest bid is paired with the lowest
ask until they stop crossing. Bids only get worse and asks only get more
expensive as they are extracted, so the first non-crossing pair ends the
book. Books are independent; a fault in one never touches another.
"""

from __future__ import annotations

from typing import Iterable, Optional

import structlog

from twinarb.exceptions import (
    BalanceUnavailable,
    BookError,
    EmptyBook,
    ExecutionError,
    TokenMismatch,
    ZeroTradable,
)
from twinarb.market.book import Book, ask_price, bid_price
from twinarb.market.order import Order
from twinarb.matcher.config import SIZING_MAX, MatcherConfig
from twinarb.matcher.models import Fill, Twin, TwinPlan

logger = structlog.get_logger()


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def crosses(bid: Order, ask: Order) -> bool:
    """True when the bid pays strictly more quote per base than the ask asks."""
    return bid_price(bid) > ask_price(ask)


def size_sides(
    sizing: str,
    base_available: int,
    quote_available: int,
    bid: Order,
    ask: Order,
) -> tuple[int, int]:
    """Candidate base and quote amounts for a crossed pair.

    ``max`` takes the greatest of the available balance and both order
    sizes on each side, ``min`` the smallest.
    """
    pick = max if sizing == SIZING_MAX else min
    base_amount = pick(base_available, bid.buy_amount, ask.sell_amount)
    quote_amount = pick(quote_available, bid.sell_amount, ask.buy_amount)
    return base_amount, quote_amount


def quote_as_base(quote_amount: int, ask: Order) -> int:
    """Base the ask gives for ``quote_amount`` quote, truncated."""
    return quote_amount * ask.sell_amount // ask.buy_amount


def plan_twin(
    bid: Order,
    ask: Order,
    base_amount: int,
    quote_amount: int,
) -> TwinPlan:
    """Order the two legs and work out what each one moves.

    The larger side (in base terms) goes first. The second leg buys back
    at least what the first leg sold, so the first fill is never negative
    and the margin ends up in the other token.
    """
    base, quote = bid.buy_token, bid.sell_token
    quote_in_base = quote_as_base(quote_amount, ask)
    if base_amount == 0 and quote_in_base == 0:
        raise ZeroTradable(f"can't trade marginal amounts: {base_amount} & {quote_amount}")

    if base_amount > quote_in_base:
        proceeds = base_amount * bid.sell_amount // bid.buy_amount
        buy_back = _ceil_div(base_amount * ask.buy_amount, ask.sell_amount)
        returned = buy_back * ask.sell_amount // ask.buy_amount
        return TwinPlan(
            first_order=bid,
            first_selling=base_amount,
            second_order=ask,
            second_selling=buy_back,
            first=Fill(base, returned - base_amount),
            second=Fill(quote, proceeds - buy_back),
        )

    proceeds = quote_in_base
    buy_back = _ceil_div(quote_amount * bid.buy_amount, bid.sell_amount)
    returned = buy_back * bid.sell_amount // bid.buy_amount
    return TwinPlan(
        first_order=ask,
        first_selling=quote_amount,
        second_order=bid,
        second_selling=buy_back,
        first=Fill(quote, returned - quote_amount),
        second=Fill(base, proceeds - buy_back),
    )


class ArbitrageMatcher:
    """Turns crossed orders into settled twins.

    Parameters
    ----------
    atomic:
        Balance source and atomic executor (see ``twinarb.venue.base.Atomic``).
    config:
        Threshold and sizing mode.
    market:
        Market handed to ``execute_atomic``; defaults to ``atomic``.
    """

    def __init__(self, atomic, config: Optional[MatcherConfig] = None, market=None) -> None:
        self.atomic = atomic
        self.config = config or MatcherConfig()
        self.market = market if market is not None else atomic

    async def arbitrage(self, books: Iterable[Book]) -> list[Twin]:
        twins: list[Twin] = []
        for book in books:
            twins.extend(await self.match_book(book))
        return twins

    async def match_book(self, book: Book) -> list[Twin]:
        """Match one book until it stops crossing or has to be abandoned.

        Twins settled before an abandon are kept.
        """
        twins: list[Twin] = []
        try:
            while True:
                bid = book.highest_bid()
                ask = book.lowest_ask()
                if not crosses(bid, ask):
                    break
                twin = await self._match_pair(book, bid, ask)
                if twin is not None:
                    twins.append(twin)
        except EmptyBook:
            pass
        except ZeroTradable as exc:
            logger.warning("zero_tradable", book=repr(book), error=str(exc))
        except BookError as exc:
            logger.error("book_abandoned", book=repr(book),
                         reason=type(exc).__name__, error=str(exc))
        return twins

    async def _match_pair(self, book: Book, bid: Order, ask: Order) -> Optional[Twin]:
        # base is what the bid buys and the ask sells
        if bid.buy_token != ask.sell_token:
            raise TokenMismatch(f"base token mismatch in {book}: {bid.buy_token} != {ask.sell_token}")
        # quote is what the bid sells and the ask buys
        if bid.sell_token != ask.buy_token:
            raise TokenMismatch(f"quote token mismatch in {book}: {bid.sell_token} != {ask.buy_token}")
        base, quote = bid.buy_token, bid.sell_token

        base_available = await self._available(base)
        quote_available = await self._available(quote)
        base_amount, quote_amount = size_sides(
            self.config.sizing, base_available, quote_available, bid, ask)

        plan = plan_twin(bid, ask, base_amount, quote_amount)
        if plan.margin < self.config.threshold:
            logger.info("margin_below_threshold", base=base, quote=quote,
                        margin=plan.margin, margin_token=plan.second.token,
                        threshold=self.config.threshold)
            return None

        try:
            cost = await self.atomic.execute_atomic(
                self.market,
                plan.first_order, plan.first_selling,
                plan.second_order, plan.second_selling,
            )
        except ExecutionError:
            raise
        except Exception as exc:
            raise ExecutionError(f"atomic execution failed ({exc})") from exc

        twin = Twin(first=plan.first, second=plan.second, cost=cost)
        logger.info("twin_executed", first_token=twin.first.token,
                    first_amount=twin.first.amount, second_token=twin.second.token,
                    second_amount=twin.second.amount, cost=cost)
        return twin

    async def _available(self, token: str) -> int:
        try:
            return await self.atomic.balance(token)
        except Exception as exc:
            raise BalanceUnavailable(f"could not get balance for {token} ({exc})") from exc
