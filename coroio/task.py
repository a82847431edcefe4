import logging
from collections.abc import Awaitable
from collections.abc import Callable
from concurrent.futures import Future
from contextlib import suppress
from functools import partial
from functools import wraps
from typing import Any
from typing import Self

from .errors import Released
from .handle import Handle
from .state import Status
from .suspension import Resumption
from .suspension import Suspension

logger = logging.getLogger(__name__)


class Task[T]:
    """A computation that starts running as soon as it is created.

    The body runs on the constructing thread until it first awaits a
    suspension point that is not ready, or until it finishes. Whoever
    the suspension point hands its resumption to runs the next segment,
    typically a background worker thread. The outcome is only ever read
    through ``await_result()`` and ``is_ready()``.
    """

    def __init__(self, awaitable: Awaitable[T], /, *, name: str | None = None):
        self.__future = Future[T]()
        self.__handle = Handle[Suspension, T](awaitable.__await__(), name=name)
        self.__run(self.__handle.resume)

    def __repr__(self):
        return f"<{type(self).__name__} {self.__handle.name!r}>"

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied.")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied.")

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args, **kwargs):
        self.release()

    def __run(self, step: Callable[[], Any]) -> None:
        handle = self.__handle
        while True:
            try:
                suspension = step()
            except BaseException:
                if handle.done():
                    self.__settle()
                raise

            if handle.done():
                self.__settle()
                return
            if handle.released:
                return

            if not isinstance(suspension, Suspension):
                error = TypeError(f"Expected a suspension, got {suspension!r}")
                step = partial(handle.throw, error)
                continue
            try:
                ready = suspension.ready()
            except Exception as exception:
                step = partial(handle.throw, exception)
                continue
            if ready:
                step = handle.resume
                continue

            logger.debug("%s suspending on %r", handle.name, suspension)
            try:
                suspension.suspend(Resumption(self.__resume))
            except Exception as exception:
                step = partial(handle.throw, exception)
                continue
            return

    def __resume(self) -> None:
        # The owner may release the task while its resumption is pending.
        with suppress(Released):
            self.__run(self.__handle.resume)

    def __settle(self) -> None:
        state = self.__handle.state
        if state.status is Status.FAILED:
            assert state.failure is not None
            self.__future.set_exception(state.failure)
        else:
            self.__future.set_result(state.result)

    def await_result(self, timeout: float | None = None) -> T:
        """Wait for the body to finish and return what it returned.

        Raises the body's exception instead if it failed, on every call.
        """
        if self.__handle.released and not self.__future.done():
            raise Released(f"{self!r} was released before it finished.")
        return self.__future.result(timeout)

    def is_ready(self) -> bool:
        return self.__future.done()

    def release(self) -> None:
        self.__handle.release()


def task[**A, T](fn: Callable[A, Awaitable[T]]) -> Callable[A, Task[T]]:
    """Decorate an async function so that calling it starts a ``Task``."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Task[T]:
        return Task(fn(*args, **kwargs), name=fn.__qualname__)

    return wrapper
