import asyncio
import threading
from typing import Any, Callable, Protocol

from lull.settings import get_settings

Callback = Callable[[], None]


class Scheduler(Protocol):
    """Deferred-callback facility used by the debounce wrappers.

    Delays are given in milliseconds and are passed through as-is.
    """

    def call_later(self, delay: float, callback: Callback) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ThreadScheduler:
    def call_later(self, delay: float, callback: Callback) -> threading.Timer:
        t = threading.Timer(delay / 1000, callback)
        t.start()
        return t

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class LoopScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        # without an explicit loop, follow whichever loop is running now
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay / 1000, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


def default_scheduler() -> Scheduler:
    match get_settings().scheduler:
        case "asyncio":
            return LoopScheduler()
        case _:
            return ThreadScheduler()
