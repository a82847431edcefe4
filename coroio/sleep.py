import logging
from dataclasses import dataclass
from math import isfinite
from threading import TIMEOUT_MAX

from .config import default_timer
from .suspension import Resumption
from .suspension import Suspension
from .timer import Timer

logger = logging.getLogger(__name__)


@dataclass(eq=False, kw_only=True)
class Sleep(Suspension):
    interval: float
    timer: Timer | None = None

    def __post_init__(self):
        if not isfinite(self.interval) or self.interval > TIMEOUT_MAX:
            raise ValueError(
                f"Sleep interval must be finite and at most {TIMEOUT_MAX}s, "
                f"got {self.interval!r}"
            )

    def ready(self) -> bool:
        return self.interval <= 0

    def arm(self, resumption: Resumption, /) -> None:
        timer = default_timer() if self.timer is None else self.timer
        logger.debug("Sleeping %ss on %r", self.interval, timer)
        timer.schedule(self.interval, resumption)


def sleep(interval: float, /, *, timer: Timer | None = None) -> Sleep:
    return Sleep(interval=interval, timer=timer)
