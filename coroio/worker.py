import logging
from collections.abc import Callable
from concurrent.futures import Future
from contextvars import copy_context
from threading import Thread
from time import sleep as time_sleep

logger = logging.getLogger(__name__)


class Worker(Thread):
    """Wait out one interval off the owning thread, then fire once.

    The callback runs in a copy of the context of the thread that
    created the worker. Nothing joins a worker; its outcome is kept on
    ``future`` and failures are logged.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], object],
        *,
        name: str | None = None,
    ):
        super().__init__(target=self.__fire, name=name, daemon=True)
        self.__interval = interval
        self.__callback = callback
        self.__context = copy_context()
        self.__future = Future[None]()
        self.__future.add_done_callback(self.__report)

    def __fire(self) -> None:
        if not self.__future.set_running_or_notify_cancel():
            return

        try:
            time_sleep(self.__interval)
            logger.debug("%s firing after %ss", self.name, self.__interval)
            self.__context.run(self.__callback)
        except BaseException as exception:
            self.__future.set_exception(exception)
        else:
            self.__future.set_result(None)

    def __report(self, future: Future[None]) -> None:
        if future.cancelled():
            return
        if (exception := future.exception()) is not None:
            logger.error("%s callback failed", self.name, exc_info=exception)

    @property
    def future(self) -> Future[None]:
        """Get the Future that completes once the callback has run."""
        return self.__future
