"""
Debounced saving.

Rapid successive save requests are batched into one flush that runs after a
short delay. The save callback always reads the current state, so a single
flush covers every change requested before it started.

Usage:
    saver = DebouncedSaver(save_coroutine_function, delay=1.0)

    saver.schedule()      # from any handler running on the event loop
    await saver.flush()   # before switching chats and at shutdown
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger("DebouncedSaver")


class DebouncedSaver:
    """Batches save requests into delayed flushes."""

    def __init__(self, save: Callable[[], Awaitable[None]], delay: float = 1.0):
        self._save = save
        self.delay = delay
        self._pending = False
        self._task: Optional[asyncio.Task] = None
        self._wake: Optional[asyncio.Event] = None
        self.flush_count = 0

    @property
    def pending(self) -> bool:
        return self._pending

    def schedule(self) -> None:
        """
        Request a save.

        Without a running event loop the request stays pending until the next
        explicit flush().
        """
        self._pending = True
        if self._task is not None and not self._task.done():
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        self._wake = asyncio.Event()
        self._task = loop.create_task(self._run())

    async def flush(self) -> None:
        """Run any pending save now and wait for it to finish."""
        task = self._task
        if task is not None and not task.done():
            self._wake.set()
            await task
        await self._drain()

    async def _run(self) -> None:
        try:
            await asyncio.wait_for(self._wake.wait(), timeout=self.delay)
        except asyncio.TimeoutError:
            pass
        await self._drain()

    async def _drain(self) -> None:
        while self._pending:
            self._pending = False
            try:
                await self._save()
                self.flush_count += 1
            except Exception as e:
                # Keep the request so the next schedule() or flush() retries it
                self._pending = True
                logger.error(f"Debounced save failed: {e}")
                return
