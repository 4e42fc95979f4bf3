"""
Bounded background job pool.

Each accepted request becomes one asyncio task. At most `max_concurrency`
jobs run at once, at most `max_pending` are admitted (running + waiting),
and every job is cut off after `job_timeout` seconds. Job failures are
logged, never re-raised.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Set

logger = logging.getLogger(__name__)


class TaskPool:
    def __init__(self, max_concurrency: int = 8, max_pending: int = 100, job_timeout: float = 30.0):
        if max_concurrency < 1 or max_pending < 1:
            raise ValueError("max_concurrency and max_pending must be >= 1")
        self.max_concurrency = max_concurrency
        self.max_pending = max_pending
        self.job_timeout = job_timeout
        self._slots = asyncio.Semaphore(max_concurrency)
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, name: str, coro: Coroutine[Any, Any, Any]) -> bool:
        """Schedule `coro`; False (and the coroutine closed) when the pool is full or closed."""
        if self._closed or len(self._tasks) >= self.max_pending:
            coro.close()
            logger.warning("Job %s refused: pool %s (%d pending)",
                           name, "closed" if self._closed else "saturated", len(self._tasks))
            return False

        task = asyncio.create_task(self._run(name, coro), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _run(self, name: str, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            async with self._slots:
                await asyncio.wait_for(coro, timeout=self.job_timeout)
        except asyncio.TimeoutError:
            logger.error("Job %s timed out after %ss", name, self.job_timeout)
        except asyncio.CancelledError:
            logger.warning("Job %s cancelled", name)
            raise
        except Exception:
            logger.exception("Job %s failed", name)
        else:
            logger.debug("Job %s done", name)
        finally:
            # no-op unless cancelled while still waiting for a slot
            coro.close()

    async def shutdown(self, timeout: float = 10.0) -> None:
        """Stop accepting jobs, wait up to `timeout` for in-flight ones, cancel the rest."""
        self._closed = True
        if not self._tasks:
            return
        tasks = list(self._tasks)
        _, still_running = await asyncio.wait(tasks, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            logger.warning("Cancelled %d unfinished jobs at shutdown", len(still_running))
            await asyncio.gather(*still_running, return_exceptions=True)
