import logging
from collections.abc import Callable
from collections.abc import Generator
from itertools import count
from operator import methodcaller
from threading import Lock
from typing import Any
from typing import Self

from .errors import Reentered
from .errors import Released
from .state import State
from .state import Status

logger = logging.getLogger(__name__)

_counter = count(1).__next__


class Handle[Y, R]:
    """The single owner of one suspended computation.

    A handle pairs a body, a generator or the iterator behind an
    awaitable, with the state record describing it. Each resume runs
    the body for exactly one segment, up to its next yield or until it
    finishes, and records the outcome. Exceptions from the body are
    captured in the state record rather than raised to the resumer.

    Handles cannot be copied. Ownership moves with ``transfer()``, and
    ``release()`` abandons the body wherever it is suspended.
    """

    def __init__(
        self,
        body: Generator[Y, Any, R],
        /,
        *,
        name: str | None = None,
        state: State[Y, R] | None = None,
    ):
        self.name = name or f"handle-{_counter()}"
        self.__body: Generator[Y, Any, R] | None = body
        self.__state = state or State[Y, R]()
        self.__lock = Lock()
        self.__released = False

    def __repr__(self):
        status = "released" if self.__released else self.__state.status.value
        return f"<{type(self).__name__} {self.name!r} {status}>"

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied, use transfer().")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied, use transfer().")

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args, **kwargs):
        self.release()

    @property
    def state(self) -> State[Y, R]:
        return self.__state

    @property
    def status(self) -> Status:
        return self.__state.status

    @property
    def released(self) -> bool:
        return self.__released

    def done(self) -> bool:
        with self.__lock:
            return self.__state.status.terminal

    def resume(self, value: Any = None, /) -> Y | None:
        """Run the body until it yields again or finishes.

        Returns what the body yielded, or None once it has finished.
        """
        return self.__step(methodcaller("send", value))

    def throw(self, exception: BaseException, /) -> Y | None:
        """Raise an exception inside the body where it is suspended."""
        return self.__step(methodcaller("throw", exception))

    def __step(self, step: Callable[[Generator[Y, Any, R]], Y]) -> Y | None:
        with self.__lock:
            if self.__released or self.__body is None:
                raise Released(f"{self!r} has been released.")
            if self.__state.status is Status.RUNNING:
                raise Reentered(f"{self!r} is already running.")
            self.__state.transition(Status.RUNNING)
            body = self.__body

        try:
            yielded = step(body)
        except StopIteration as stop:
            self.__finish(lambda state: state.complete(stop.value))
            return None
        except BaseException as exception:
            self.__finish(lambda state: state.fail(exception))
            logger.debug("%s failed with %r", self.name, exception)
            if not isinstance(exception, Exception):
                raise
            return None

        self.__finish(lambda state: state.suspend(yielded))
        return yielded

    def __finish(self, record: Callable[[State[Y, R]], None]) -> None:
        with self.__lock:
            record(self.__state)
            abandoned = self.__detach() if self.__released else None
        logger.debug("%s %s", self.name, self.__state.status.value)
        if abandoned is not None:
            abandoned.close()

    def __detach(self) -> Generator[Y, Any, R] | None:
        body, self.__body = self.__body, None
        return body

    def release(self) -> None:
        """Give up the computation, closing the body if it is suspended.

        Safe to call any number of times. When a segment is running on
        another thread the body is closed as soon as that segment ends.
        """
        with self.__lock:
            if self.__released:
                return
            self.__released = True
            if self.__state.status is Status.RUNNING:
                return
            abandoned = self.__detach()
        logger.debug("%s released while %s", self.name, self.__state.status.value)
        if abandoned is not None:
            abandoned.close()

    def transfer(self) -> Self:
        """Move the computation into a new handle, releasing this one."""
        with self.__lock:
            if self.__released or self.__body is None:
                raise Released(f"{self!r} has been released.")
            if self.__state.status is Status.RUNNING:
                raise Reentered(f"{self!r} cannot be transferred while running.")
            self.__released = True
            body = self.__detach()
        assert body is not None
        return type(self)(body, name=self.name, state=self.__state)

