# twinarb/matcher/ticker.py
"""Periodic tick source with a one-slot buffer."""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import structlog

logger = structlog.get_logger()


class Ticker:
    """Puts the current time on ``ticks`` every ``interval`` seconds.

    The queue holds a single tick. When the consumer is still busy with a
    previous tick, one tick waits and every further one is dropped, so an
    overrunning consumer gets exactly one catch-up tick instead of a burst.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("ticker interval must be positive")
        self.interval = interval
        self.ticks: asyncio.Queue[float] = asyncio.Queue(maxsize=1)
        self.dropped = 0
        self._task: Optional[asyncio.Task] = None

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the tick task and wait until it is gone."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.interval
        while True:
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            deadline += self.interval
            try:
                self.ticks.put_nowait(time.time())
            except asyncio.QueueFull:
                self.dropped += 1
                logger.debug("tick_dropped", dropped=self.dropped)
