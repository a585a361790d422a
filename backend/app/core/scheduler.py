import asyncio
import logging
from typing import Awaitable, Callable, Optional

log = logging.getLogger(__name__)


class TickScheduler:
    """Repeating asyncio task that calls ``on_tick`` every ``interval`` seconds."""

    def __init__(self, on_tick: Callable[[], Awaitable[None]], interval: float = 1.0):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.on_tick = on_tick
        self.interval = interval
        self.task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def start(self):
        if self.running:
            return
        self.task = asyncio.create_task(self._run())
        log.debug(f"Tick scheduler started ({self.interval}s)")

    async def stop(self):
        if self.task is None:
            return
        task, self.task = self.task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # only absorb the tick loop's own cancellation
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        log.debug("Tick scheduler stopped")

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.on_tick()
            except Exception as e:
                log.error(f"Tick failed: {e}", exc_info=True)

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()
