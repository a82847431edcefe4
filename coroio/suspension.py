import logging
from abc import abstractmethod
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Generator
from dataclasses import dataclass
from dataclasses import field
from threading import Lock
from typing import Self
from weakref import WeakMethod

from .errors import AlreadyConsumed

logger = logging.getLogger(__name__)


class Resumption:
    """A single-use capability to resume one suspended task.

    It only holds a weak reference to the bound method that resumes the
    task, so a pending resumption never keeps a discarded task alive.
    Resuming a task that no longer exists does nothing.
    """

    def __init__(self, resume: Callable[[], None], /):
        self.__resume = WeakMethod(resume)
        self.__lock = Lock()
        self.__consumed = False

    def __repr__(self):
        consumed = " consumed" if self.__consumed else ""
        return f"<{type(self).__name__} {self.__resume()!r}{consumed}>"

    def __call__(self) -> None:
        with self.__lock:
            if self.__consumed:
                raise AlreadyConsumed(f"{self!r} has already resumed its task.")
            self.__consumed = True

        resume = self.__resume()
        if resume is None:
            logger.debug("Dropping resumption of a discarded task.")
            return
        resume()

    @property
    def consumed(self) -> bool:
        return self.__consumed


@dataclass(eq=False, kw_only=True)
class Suspension(Awaitable[None]):
    """Base class for the points where a task body can suspend.

    When a task body awaits a suspension, the task first asks whether it
    is already ``ready()``, in which case the body simply continues.
    Otherwise the suspension is given a ``Resumption`` in ``suspend()``
    and must arrange for it to be called exactly once. The body carries
    on from the ``await`` after that call, receiving no value.
    """

    consumed: bool = field(default=False, init=False, repr=False)

    def ready(self) -> bool:
        return False

    def suspend(self, resumption: Resumption, /) -> None:
        if self.consumed:
            raise AlreadyConsumed(f"{self!r} has already suspended a task.")
        self.consumed = True
        self.arm(resumption)

    @abstractmethod
    def arm(self, resumption: Resumption, /) -> None:
        """Arrange for the resumption to be called once, later."""
        raise NotImplementedError("Subclasses must implement this method.")

    def __await__(self) -> Generator[Self, None, None]:
        yield self
