from collections.abc import Callable

from ..timer import Timer


class StubTimer(Timer):
    """A timer that only fires when it is told to.

    Callbacks are fired on the calling thread, which keeps tests of
    suspended tasks deterministic.
    """

    def __init__(self):
        self.__pending: list[tuple[float, Callable[[], object]]] = []

    def __len__(self) -> int:
        return len(self.__pending)

    def schedule(self, interval: float, callback: Callable[[], object], /) -> None:
        self.__pending.append((interval, callback))

    @property
    def intervals(self) -> list[float]:
        return [interval for interval, _ in self.__pending]

    def fire(self) -> None:
        """Fire every pending callback in the order they were scheduled."""
        pending, self.__pending = self.__pending, []
        for _, callback in pending:
            callback()
