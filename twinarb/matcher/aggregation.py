"""Per-cycle totals over settled twins."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from twinarb.matcher.models import Twin


def aggregate(twins: Iterable[Twin]) -> tuple[dict[str, int], int]:
    """Sum signed fill amounts per token and settlement cost over all twins."""
    changes: dict[str, int] = defaultdict(int)
    cost = 0
    for twin in twins:
        cost += twin.cost
        changes[twin.first.token] += twin.first.amount
        changes[twin.second.token] += twin.second.amount
    return dict(changes), cost
