"""Records produced by a matching cycle."""

from __future__ import annotations

from dataclasses import dataclass, field

from twinarb.market.order import Order


@dataclass(frozen=True, slots=True)
class Fill:
    """Net change of one token: positive received, negative spent."""

    token: str
    amount: int


@dataclass(frozen=True, slots=True)
class Twin:
    """Two order fills settled as one atomic operation."""

    first: Fill
    second: Fill
    cost: int

    @property
    def margin(self) -> int:
        return self.second.amount


@dataclass(frozen=True, slots=True)
class TwinPlan:
    """Execution plan for a crossed bid/ask pair, before settlement."""

    first_order: Order
    first_selling: int
    second_order: Order
    second_selling: int
    first: Fill
    second: Fill

    @property
    def margin(self) -> int:
        return self.second.amount


@dataclass(slots=True)
class CycleReport:
    twins: list[Twin] = field(default_factory=list)
    changes: dict[str, int] = field(default_factory=dict)
    balances: dict[str, int] = field(default_factory=dict)
    cost: int = 0
