"""Arbitrage matching: sizing, twins, cycle reporting and the engine loop."""

from .models import Fill, Twin, TwinPlan, CycleReport
from .config import MatcherConfig, SIZING_MAX, SIZING_MIN
from .arbitrage import ArbitrageMatcher, crosses, size_sides, quote_as_base, plan_twin
from .aggregation import aggregate
from .ticker import Ticker
from .engine import MatcherEngine, EngineState

__all__ = [
    "Fill",
    "Twin",
    "TwinPlan",
    "CycleReport",
    "MatcherConfig",
    "SIZING_MAX",
    "SIZING_MIN",
    "ArbitrageMatcher",
    "crosses",
    "size_sides",
    "quote_as_base",
    "plan_twin",
    "aggregate",
    "Ticker",
    "MatcherEngine",
    "EngineState",
]
