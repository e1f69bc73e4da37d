# twinarb/matcher/engine.py
"""Matcher engine: periodic book building, matching and reporting."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

import structlog

from twinarb.exceptions import MarketUnavailable
from twinarb.market.builder import get_books
from twinarb.matcher.aggregation import aggregate
from twinarb.matcher.arbitrage import ArbitrageMatcher
from twinarb.matcher.config import MatcherConfig
from twinarb.matcher.models import CycleReport
from twinarb.matcher.ticker import Ticker

logger = structlog.get_logger()


class EngineState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    STOPPING = "stopping"


class MatcherEngine:
    """Runs one matching cycle per refresh tick on a single task.

    Ticks and the stop signal are handled one at a time, so a cycle never
    overlaps another cycle or the shutdown. ``stop()`` returns only once the
    loop has exited and its ticker is released. An engine runs once; build
    a new one to start again.
    """

    def __init__(
        self, *,
        atomic,
        wallet,
        config: Optional[MatcherConfig] = None,
        market=None,
    ) -> None:
        self.config = config or MatcherConfig()
        self.atomic = atomic
        self.wallet = wallet
        self.market = market if market is not None else atomic
        self.matcher = ArbitrageMatcher(atomic, self.config, market=self.market)

        self.state = EngineState.STOPPED
        self.cycles = 0
        self.last_report: Optional[CycleReport] = None
        self._used = False
        self._stop_event: Optional[asyncio.Event] = None
        self._ticker: Optional[Ticker] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self.state is EngineState.RUNNING

    async def start(self) -> None:
        if self._used:
            raise RuntimeError("matcher engine can only be started once")
        self._used = True
        self._stop_event = asyncio.Event()
        self._ticker = Ticker(self.config.refresh)
        self._ticker.start()
        self._task = asyncio.create_task(self._run(self._stop_event, self._ticker.ticks))
        self.state = EngineState.RUNNING
        logger.info("matcher_started", refresh=self.config.refresh,
                    threshold=self.config.threshold, sizing=self.config.sizing,
                    orientation=self.config.orientation)

    async def stop(self) -> None:
        """Signal the loop and wait for it to exit.

        Every caller blocks until the loop is done, including ones that
        arrive while another stop is already in progress.
        """
        if self.state is EngineState.STOPPED or self._task is None:
            return
        if self.state is EngineState.RUNNING:
            self.state = EngineState.STOPPING
            logger.info("matcher_stopping")
            self._stop_event.set()
        await self._task
        if self.state is EngineState.STOPPING:
            self.state = EngineState.STOPPED
            logger.info("matcher_stopped", cycles=self.cycles)

    async def _run(self, stop: asyncio.Event, ticks: asyncio.Queue) -> None:
        try:
            while True:
                stop_wait = asyncio.ensure_future(stop.wait())
                tick_wait = asyncio.ensure_future(ticks.get())
                done, pending = await asyncio.wait(
                    {stop_wait, tick_wait}, return_when=asyncio.FIRST_COMPLETED)
                for fut in pending:
                    fut.cancel()
                await asyncio.gather(*pending, return_exceptions=True)

                # stop wins over a tick that became ready at the same time
                if stop_wait in done or stop.is_set():
                    break
                await self._on_tick()
        finally:
            if self._ticker is not None:
                await self._ticker.stop()

    async def _on_tick(self) -> None:
        try:
            await self.run_cycle()
        except MarketUnavailable as exc:
            logger.error("orders_unavailable", error=str(exc))
        except Exception as exc:
            logger.error("cycle_failed", error=str(exc), error_type=type(exc).__name__)

    async def run_cycle(self) -> CycleReport:
        """Build books, match them and report the balance changes."""
        books = await get_books(self.market, orientation=self.config.orientation)
        twins = await self.matcher.arbitrage(books)
        changes, cost = aggregate(twins)
        logger.info("twins_executed", count=len(twins), books=len(books), cost=cost)

        balances: dict[str, int] = {}
        for token, change in changes.items():
            try:
                balance = await self.wallet.balance(token)
            except Exception as exc:
                logger.warning("wallet_balance_unavailable", token=token, error=str(exc))
                continue
            balances[token] = balance
            logger.info("token_balance", token=token, balance=balance, change=change)

        logger.info("cycle_cost", cost=cost)
        report = CycleReport(twins=twins, changes=changes, balances=balances, cost=cost)
        self.last_report = report
        self.cycles += 1
        return report
