"""IdleWakeMonitor -- detect that the process was suspended and reconnect.

A 30 second timer that fires more than 60 seconds after its previous
tick can only have been held back by a suspended process (laptop lid
closed, device asleep). Wall-clock time is used on purpose: monotonic
clocks stop while the machine sleeps.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import ClassVar

from teamgate.models import IdleWakeState
from teamgate.types import RealtimeTransport

logger = logging.getLogger(__name__)


class IdleWakeMonitor:
    """Periodic wake-up detector.

    Only one monitor runs per process: :meth:`start` stops whichever
    monitor was running before.
    """

    _active: ClassVar[IdleWakeMonitor | None] = None

    def __init__(
        self,
        transport: RealtimeTransport,
        *,
        interval: float = 30.0,
        threshold: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transport = transport
        self._interval = interval
        self._threshold = threshold
        self._clock = clock
        self._state = IdleWakeState(last_tick_timestamp=clock())
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> IdleWakeState:
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> None:
        """Reset the last tick and schedule the timer on the running loop."""
        previous = IdleWakeMonitor._active
        if previous is not None:
            previous.stop()
        self.stop()
        self._state = IdleWakeState(last_tick_timestamp=self._clock())
        self._task = asyncio.ensure_future(self._run())
        IdleWakeMonitor._active = self

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if IdleWakeMonitor._active is self:
            IdleWakeMonitor._active = None

    # -- ticking --------------------------------------------------------------

    async def tick(self) -> bool:
        """Run one check. Returns ``True`` when a reconnect was triggered."""
        now = self._clock()
        woke = now > self._state.last_tick_timestamp + self._threshold
        self._state = IdleWakeState(last_tick_timestamp=now)
        if woke:
            logger.info("computer woke up - fetching latest")
            try:
                await self._transport.reconnect(forced=False)
            except Exception:
                logger.warning("Reconnect after wake-up failed", exc_info=True)
        return woke

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.tick()
