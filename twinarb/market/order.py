# twinarb/market/order.py
"""Standing offers on the venue."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from twinarb.exceptions import InvalidOrder


@dataclass(frozen=True, slots=True)
class Order:
    """One standing offer: give ``sell_amount`` of ``sell_token`` for
    ``buy_amount`` of ``buy_token``.

    Amounts are integers in the token's smallest unit. Construction
    rejects anything the matcher could not price.
    """

    buy_token: str
    sell_token: str
    buy_amount: int
    sell_amount: int
    order_id: str = ""

    def __post_init__(self) -> None:
        if not self.buy_token or not self.sell_token:
            raise InvalidOrder("order tokens must be non-empty")
        if self.buy_token == self.sell_token:
            raise InvalidOrder(f"order buys and sells the same token: {self.buy_token}")
        for name in ("buy_amount", "sell_amount"):
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful amount
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidOrder(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidOrder(f"{name} must be non-negative, got {value}")
        if self.buy_amount == 0:
            raise InvalidOrder("buy_amount must be positive")

    @property
    def rate(self) -> Fraction:
        """Sell amount per unit bought."""
        return Fraction(self.sell_amount, self.buy_amount)

    @property
    def inverse_rate(self) -> Fraction | None:
        """Buy amount per unit sold, None when the order sells nothing."""
        if self.sell_amount == 0:
            return None
        return Fraction(self.buy_amount, self.sell_amount)
