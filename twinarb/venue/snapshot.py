"""Load a venue snapshot (open offers and balances) from JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from twinarb.exceptions import InvalidOrder
from twinarb.market.order import Order

logger = structlog.get_logger()


class OrderRow(BaseModel):
    """One offer as exported from the venue. Amounts may be JSON strings."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(default="", alias="id")
    buy_token: str = Field(alias="buyToken")
    sell_token: str = Field(alias="sellToken")
    buy_amount: int = Field(alias="buyAmount")
    sell_amount: int = Field(alias="sellAmount")


class Snapshot(BaseModel):
    balances: dict[str, int] = Field(default_factory=dict)
    orders: list[dict[str, Any]] = Field(default_factory=list)


def parse_orders(rows: list[dict[str, Any]]) -> list[Order]:
    """Turn raw rows into orders, skipping the ones that can't be priced."""
    orders: list[Order] = []
    for index, raw in enumerate(rows):
        try:
            row = OrderRow.model_validate(raw)
            orders.append(Order(
                buy_token=row.buy_token,
                sell_token=row.sell_token,
                buy_amount=row.buy_amount,
                sell_amount=row.sell_amount,
                order_id=row.order_id,
            ))
        except (ValidationError, InvalidOrder) as exc:
            logger.warning("order_rejected", index=index, error=str(exc)[:200])
    return orders


def load_snapshot(path: str | Path) -> tuple[list[Order], dict[str, int]]:
    """Read ``{"balances": {...}, "orders": [...]}`` from ``path``."""
    data = json.loads(Path(path).read_text())
    snapshot = Snapshot.model_validate(data)
    orders = parse_orders(snapshot.orders)
    logger.info("snapshot_loaded", path=str(path), orders=len(orders),
                rejected=len(snapshot.orders) - len(orders),
                tokens=len(snapshot.balances))
    return orders, dict(snapshot.balances)
