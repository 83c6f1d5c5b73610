import logging
import threading
import types
from functools import partial, update_wrapper, wraps
from typing import Any, Callable, Generic, ParamSpec

from lull.scheduling import Scheduler, default_scheduler
from lull.settings import get_settings

log = logging.getLogger(__name__)

P = ParamSpec("P")

CallState = tuple[tuple[Any, ...], dict[str, Any]]


def _name(func: Callable) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


class Debounced(Generic[P]):
    """Trailing-edge debounced callable with manual cancel and flush.

    Calls are deferred until `delay` milliseconds pass without another call,
    then the wrapped function runs once with the arguments of the last call.
    """

    def __init__(
        self,
        func: Callable[P, Any],
        delay: float | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._func = func
        self._delay = get_settings().default_delay if delay is None else delay
        self._scheduler = default_scheduler() if scheduler is None else scheduler
        self._lock = threading.Lock()
        self._handle: Any | None = None
        self._last_call: CallState | None = None
        self._generation = 0
        update_wrapper(self, func)

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> None:
        with self._lock:
            if self._take() is not None:
                log.debug(f"superseded pending call to {_name(self._func)}")

            # idle until the scheduler hands back a handle
            self._generation += 1
            handle = self._scheduler.call_later(
                self._delay, partial(self._fire, self._generation)
            )
            self._handle = handle
            self._last_call = (args, kwargs)
            log.debug(f"scheduled call to {_name(self._func)} in {self._delay}ms")

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def cancel(self) -> None:
        with self._lock:
            if self._take() is not None:
                log.debug(f"cancelled pending call to {_name(self._func)}")

    def flush(self) -> None:
        with self._lock:
            call = self._take()

        if call is None:
            return

        log.debug(f"flushing pending call to {_name(self._func)}")
        args, kwargs = call
        self._func(*args, **kwargs)

    def _take(self) -> CallState | None:
        """Stop the pending timer and hand back its call state.

        Must be called with the lock held.
        """
        if self._handle is None:
            return None

        self._scheduler.cancel(self._handle)
        self._generation += 1
        call = self._last_call
        self._handle = None
        self._last_call = None
        return call

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a thread timer may start running after it was superseded
            if generation != self._generation or self._last_call is None:
                return

            args, kwargs = self._last_call
            self._handle = None
            self._last_call = None

        log.debug(f"calling {_name(self._func)}")
        self._func(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {_name(self._func)} delay={self._delay}>"


def debounce(
    func: Callable[P, Any],
    delay: float,
    *,
    scheduler: Scheduler | None = None,
) -> Callable[P, None]:
    """Debounce `func`.

    :param func: Function to call once calls stop arriving.
    :param delay: Time in milliseconds to wait after the last call.
    :param scheduler: Deferred-callback facility, see `lull.scheduling`.

    Returns:
        function: Debounced function. It has no cancel or flush controls,
        use `use_debounce` for those.
    """
    debounced = Debounced(func, delay, scheduler=scheduler)

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> None:
        debounced(*args, **kwargs)

    return wrapper


def use_debounce(
    func: Callable[P, Any],
    delay: float | None = None,
    *,
    scheduler: Scheduler | None = None,
) -> Debounced[P]:
    """Debounce `func` and expose `cancel()` and `flush()` on the result.

    :param delay: Time in milliseconds, defaults to the `default_delay`
        setting (1500).
    """
    return Debounced(func, delay, scheduler=scheduler)
