"""
Station Sim — Scheduler
Drives the resource tick and the event tick as two asyncio tasks.

Both loops run on one event loop, so ticks and commands never interleave
within a mutation. Pausing suspends both loops; a pause or speed change
wakes them so the new period applies immediately.
"""

from typing import Callable, Dict, List, Optional, Set
import asyncio
import logging

from .engine import StationEngine

logger = logging.getLogger(__name__)


class StationScheduler:
    """
    Periodic driver for a StationEngine.

    Period of each loop is `base_period / speed`.
    """

    TICK_LOOP = "tick"
    EVENT_LOOP = "event"

    def __init__(self, engine: StationEngine):
        self.engine = engine
        self._running = False
        self._tasks: List[asyncio.Task] = []
        self._narrative_tasks: Set[asyncio.Task] = set()
        self._wake: Dict[str, asyncio.Event] = {}

        engine.commands.on_schedule_changed = self.notify

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_narratives(self) -> int:
        return len(self._narrative_tasks)

    def period(self, base_period: float) -> float:
        return base_period / self.engine.world.speed

    async def start(self):
        """Start both loops on the running event loop."""
        if self._running:
            return
        self._running = True

        engine_cfg = self.engine.config.engine
        self._wake = {self.TICK_LOOP: asyncio.Event(), self.EVENT_LOOP: asyncio.Event()}
        self._tasks = [
            asyncio.create_task(self._loop(self.TICK_LOOP, engine_cfg.tick_period_s, self._on_tick)),
            asyncio.create_task(self._loop(self.EVENT_LOOP, engine_cfg.event_period_s, self._on_event_tick)),
        ]
        logger.info("Scheduler started")

    async def stop(self):
        """Stop both loops and cancel outstanding narrative requests."""
        if not self._running:
            return
        self._running = False

        pending = self._tasks + list(self._narrative_tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        self._tasks = []
        self._narrative_tasks.clear()
        logger.info("Scheduler stopped")

    async def run_for(self, seconds: float):
        await self.start()
        try:
            await asyncio.sleep(seconds)
        finally:
            await self.stop()

    def notify(self):
        """Wake both loops so pause and speed changes take effect now."""
        for wake in self._wake.values():
            wake.set()

    async def _wait(self, wake: asyncio.Event, timeout: Optional[float]) -> bool:
        """
        Sleep for `timeout` seconds (forever if None).

        Returns:
            True if woken early by notify().
        """
        wake.clear()
        try:
            await asyncio.wait_for(wake.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def _loop(self, name: str, base_period: float, step: Callable[[], None]):
        wake = self._wake[name]
        while self._running:
            if not self.engine.is_running:
                await self._wait(wake, None)
                continue

            if await self._wait(wake, self.period(base_period)):
                logger.debug(f"{name} loop rescheduled")
                continue

            if self.engine.is_running:
                step()

    def _on_tick(self):
        self.engine.tick()
        if self.engine.world.game_over:
            logger.info(f"Station lost at tick {self.engine.world.tick}; loops suspended")

    def _on_event_tick(self):
        event = self.engine.event_tick()
        if event is None:
            return
        task = asyncio.create_task(self.engine.narrate(event))
        self._narrative_tasks.add(task)
        task.add_done_callback(self._on_narrative_done)

    def _on_narrative_done(self, task: asyncio.Task):
        self._narrative_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Narrative task failed: {error}")
