import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from heapq import heappop
from heapq import heappush
from itertools import count
from threading import Condition
from threading import TIMEOUT_MAX
from threading import Thread
from time import monotonic

from .worker import Worker

logger = logging.getLogger(__name__)


class Timer(ABC):
    @abstractmethod
    def schedule(self, interval: float, callback: Callable[[], object], /) -> None:
        """Call the callback once, from another thread, after the interval."""
        raise NotImplementedError


class ThreadTimer(Timer):
    """Start a separate worker thread for each scheduled callback."""

    def __init__(self, *, name: str = "coroio-worker"):
        self.__name = name
        self.__counter = count(1).__next__

    def schedule(self, interval: float, callback: Callable[[], object], /) -> None:
        worker = Worker(interval, callback, name=f"{self.__name}-{self.__counter()}")
        worker.start()


class HeapTimer(Timer):
    """Service all scheduled callbacks from a single waiting thread.

    Deadlines are kept on a heap. The thread is started when the first
    callback is scheduled and exits once no callbacks are pending, so
    an idle timer holds no thread. Callbacks run one at a time on that
    thread, so a slow callback delays the ones due after it.
    """

    def __init__(self, *, name: str = "coroio-heap-timer"):
        self.__name = name
        self.__condition = Condition()
        self.__heap: list[tuple[float, int, Callable[[], object]]] = []
        self.__sequence = count().__next__
        self.__thread: Thread | None = None

    def __len__(self) -> int:
        with self.__condition:
            return len(self.__heap)

    def schedule(self, interval: float, callback: Callable[[], object], /) -> None:
        deadline = monotonic() + max(interval, 0)
        with self.__condition:
            heappush(self.__heap, (deadline, self.__sequence(), callback))
            if self.__thread is None:
                self.__thread = Thread(
                    target=self.__loop, name=self.__name, daemon=True
                )
                self.__thread.start()
            else:
                self.__condition.notify()

    def __next_due(self) -> Callable[[], object] | None:
        with self.__condition:
            while self.__heap:
                deadline, _, callback = self.__heap[0]
                remaining = deadline - monotonic()
                if remaining <= 0:
                    heappop(self.__heap)
                    return callback
                self.__condition.wait(min(remaining, TIMEOUT_MAX))
            self.__thread = None
            return None

    def __loop(self) -> None:
        while (callback := self.__next_due()) is not None:
            logger.debug("%s firing %r", self.__name, callback)
            try:
                callback()
            except BaseException:
                logger.exception("%s callback %r failed", self.__name, callback)
