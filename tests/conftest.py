from __future__ import annotations

from typing import Callable

import pytest

from lull.settings import get_settings


class FakeScheduler:
    """Scheduler driven by a virtual millisecond clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self._next_id = 0
        self._timers: dict[int, tuple[float, Callable[[], None]]] = {}

    def call_later(self, delay: float, callback: Callable[[], None]) -> int:
        self._next_id += 1
        self._timers[self._next_id] = (self.now + delay, callback)
        return self._next_id

    def cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)

    @property
    def scheduled(self) -> int:
        return len(self._timers)

    def advance(self, ms: float) -> None:
        target = self.now + ms
        while True:
            due = [(at, tid) for tid, (at, _) in self._timers.items() if at <= target]
            if not due:
                break
            at, tid = min(due)
            self.now = at
            _, callback = self._timers.pop(tid)
            callback()
        self.now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LULL_DEFAULT_DELAY", raising=False)
    monkeypatch.delenv("LULL_SCHEDULER", raising=False)
    monkeypatch.delenv("LULL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LULL_LOG_FILE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
