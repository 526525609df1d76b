"""Character-by-character disclosure of a finished message."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

REVEAL_INTERVAL_SECS = 0.016

OnPrefix = Callable[[str], None]


class RevealScheduler:
    """Emits growing prefixes of a text at a fixed cadence.

    Only one reveal runs at a time; starting a new one cancels the previous.
    After :meth:`cancel` returns, the cancelled reveal never calls its
    callback again.

    Usage::

        scheduler = RevealScheduler()
        task = scheduler.start("Peace be with you.", print)
        full_text = await task
    """

    def __init__(self, interval: float = REVEAL_INTERVAL_SECS) -> None:
        self._interval = interval
        self._task: asyncio.Task[str] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, text: str, on_prefix: OnPrefix) -> asyncio.Task[str]:
        self.cancel()
        task = asyncio.create_task(self._run(text, on_prefix))
        self._task = task
        return task

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            logger.debug("Cancelling reveal")
            task.cancel()

    async def wait(self) -> str | None:
        """Wait for the current reveal; ``None`` if it was cancelled."""
        task = self._task
        if task is None:
            return None
        await asyncio.wait({task})
        if task.cancelled():
            return None
        return task.result()

    async def _run(self, text: str, on_prefix: OnPrefix) -> str:
        current = asyncio.current_task()
        for i in range(1, len(text) + 1):
            await asyncio.sleep(self._interval)
            if self._task is not current:
                raise asyncio.CancelledError
            on_prefix(text[:i])
        return text
