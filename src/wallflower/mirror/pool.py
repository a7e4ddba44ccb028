"""Bounded pool of asyncio workers with a shared result queue."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """What one submitted item produced: a value or the exception it raised."""

    item: Any
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WorkerPool:
    """Runs ``handler`` over submitted items with at most ``size`` in flight.

    Workers are long-lived tasks pulling from a task queue and pushing one
    ``TaskOutcome`` per item onto a result queue. Exceptions raised by the
    handler are captured in the outcome; they never stop a worker.

    Usage:
        async with WorkerPool(8, fetch) as pool:
            for item in items:
                pool.submit(item)
            outcomes = await pool.drain()
    """

    def __init__(self, size: int, handler: Callable[[Any], Awaitable[Any]]) -> None:
        if size < 1:
            msg = "Pool size must be at least 1"
            raise ValueError(msg)
        self.size = size
        self.handler = handler
        self._tasks: asyncio.Queue[Any] = asyncio.Queue()
        self._results: asyncio.Queue[TaskOutcome] = asyncio.Queue()
        self._workers: list[asyncio.Task[None]] = []
        self._pending = 0

    @property
    def pending(self) -> int:
        """Submitted items whose outcome has not been drained yet."""
        return self._pending

    def start(self) -> None:
        if not self._workers:
            self._workers = [
                asyncio.create_task(self._work(), name=f"worker-{i}") for i in range(self.size)
            ]

    async def stop(self) -> None:
        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

    async def __aenter__(self) -> WorkerPool:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def submit(self, item: Any) -> None:
        """Queue one item. Returns immediately."""
        if not self._workers:
            msg = "WorkerPool is not running"
            raise RuntimeError(msg)
        self._tasks.put_nowait(item)
        self._pending += 1

    async def drain(self) -> list[TaskOutcome]:
        """Wait for exactly as many outcomes as items submitted so far.

        Outcomes arrive in completion order, not submission order.
        """
        outcomes = []
        while self._pending:
            outcomes.append(await self._results.get())
            self._pending -= 1
        return outcomes

    async def _work(self) -> None:
        while True:
            item = await self._tasks.get()
            try:
                outcome = TaskOutcome(item, value=await self.handler(item))
            except Exception as e:
                logger.debug("Task for %r failed: %s", item, e)
                outcome = TaskOutcome(item, error=e)
            finally:
                self._tasks.task_done()
            self._results.put_nowait(outcome)
