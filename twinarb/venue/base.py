"""Collaborator interfaces the matching engine depends on."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from twinarb.market.order import Order


@runtime_checkable
class Market(Protocol):
    """Source of all currently open orders on the venue."""

    async def orders(self) -> Sequence[Order]: ...


@runtime_checkable
class Atomic(Market, Protocol):
    """Balance lookups and all-or-nothing settlement of two orders.

    ``execute_atomic`` sells ``first_selling`` into ``first`` and then
    ``second_selling`` into ``second``. Either both legs settle or neither
    does. Returns the settlement cost.
    """

    async def balance(self, token: str) -> int: ...

    async def execute_atomic(
        self,
        market: Market,
        first: Order,
        first_selling: int,
        second: Order,
        second_selling: int,
    ) -> int: ...


@runtime_checkable
class Wallet(Protocol):
    """Post-cycle balance reporting."""

    async def balance(self, token: str) -> int: ...
