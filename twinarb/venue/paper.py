# twinarb/venue/paper.py
"""In-memory venue for dry runs and tests."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

import structlog

from twinarb.exceptions import ExecutionError
from twinarb.market.order import Order
from twinarb.venue.snapshot import load_snapshot

logger = structlog.get_logger()


class PaperVenue:
    """Open offers plus one balance per token, all held in memory.

    Serves as Market, Atomic and Wallet at once. ``execute_atomic`` works on
    scratch copies and only commits when both legs go through.
    """

    def __init__(
        self,
        orders: Iterable[Order] = (),
        balances: Optional[dict[str, int]] = None,
        twin_cost: int = 0,
    ) -> None:
        self._orders: list[Order] = list(orders)
        self._balances: dict[str, int] = dict(balances or {})
        self.twin_cost = twin_cost
        self.settlements = 0

    @classmethod
    def from_snapshot(cls, path: str | Path, twin_cost: int = 0) -> "PaperVenue":
        orders, balances = load_snapshot(path)
        return cls(orders=orders, balances=balances, twin_cost=twin_cost)

    async def orders(self) -> list[Order]:
        return list(self._orders)

    async def balance(self, token: str) -> int:
        return self._balances.get(token, 0)

    async def execute_atomic(
        self,
        market,
        first: Order,
        first_selling: int,
        second: Order,
        second_selling: int,
    ) -> int:
        if market is not self:
            raise ExecutionError("paper venue can only settle its own offers")

        balances = dict(self._balances)
        orders = list(self._orders)
        self._fill(balances, orders, first, first_selling)
        self._fill(balances, orders, second, second_selling)

        cost = self.twin_cost
        self._balances = balances
        self._orders = orders
        self.settlements += 1
        logger.debug("paper_settled", first_selling=first_selling,
                     second_selling=second_selling, cost=cost)
        return cost

    @staticmethod
    def _fill(balances: dict[str, int], orders: list[Order], order: Order, selling: int) -> None:
        """Sell ``selling`` of what ``order`` buys into it."""
        if selling <= 0:
            raise ExecutionError(f"nothing to sell into offer {order.order_id or order}")
        try:
            index = orders.index(order)
        except ValueError:
            raise ExecutionError(f"offer no longer open: {order.order_id or order}") from None
        if selling > order.buy_amount:
            raise ExecutionError(
                f"offer buys at most {order.buy_amount} {order.buy_token}, got {selling}")
        have = balances.get(order.buy_token, 0)
        if selling > have:
            raise ExecutionError(f"insufficient {order.buy_token}: have {have}, need {selling}")

        received = selling * order.sell_amount // order.buy_amount
        balances[order.buy_token] = have - selling
        balances[order.sell_token] = balances.get(order.sell_token, 0) + received

        if selling == order.buy_amount:
            orders.pop(index)
        else:
            orders[index] = replace(
                order,
                buy_amount=order.buy_amount - selling,
                sell_amount=order.sell_amount - received,
            )
