"""
Deferred callbacks for cooldown expiry and countdown ticks.

Everything that mutates gesture state runs on one logical thread: the asyncio
event loop in the application, or a virtual clock in tests.
"""
import asyncio
import heapq
import itertools
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class LoopScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Spawned tasks are held until they finish; the loop itself only keeps weak
    references to them.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_s, callback)

    def spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = self.loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def pending(self) -> int:
        return len(self._tasks)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"❌ Background task failed: {exc!r}")


class _ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Callbacks fire only when `advance()` moves the clock past their deadline,
    in deadline order (ties in scheduling order). Spawned coroutines are
    collected in `spawned` for the caller to await or close.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self.spawned: List[Awaitable[Any]] = []
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        heapq.heappush(self._queue, (self.now + delay_s, next(self._seq), handle, callback))
        return handle

    def spawn(self, coro: Awaitable[Any]) -> Awaitable[Any]:
        self.spawned.append(coro)
        return coro

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every callback that comes due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle, callback = heapq.heappop(self._queue)
            self.now = deadline
            if not handle.cancelled:
                callback()
        self.now = target

    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)

    def take_spawned(self) -> List[Awaitable[Any]]:
        spawned, self.spawned = self.spawned, []
        return spawned
