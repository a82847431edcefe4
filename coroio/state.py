from dataclasses import dataclass
from enum import Enum

from .errors import UseAfterCompletion


class Status(Enum):
    CREATED = "created"
    RUNNING = "running"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (Status.COMPLETED, Status.FAILED)


TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.CREATED: frozenset({Status.RUNNING}),
    Status.RUNNING: frozenset({Status.SUSPENDED, Status.COMPLETED, Status.FAILED}),
    Status.SUSPENDED: frozenset({Status.RUNNING}),
    Status.COMPLETED: frozenset(),
    Status.FAILED: frozenset(),
}


class InvalidTransition(Exception):
    """The state record was asked to move backwards."""


@dataclass(eq=False, kw_only=True)
class State[Y, R]:
    """Everything recorded about one suspended computation."""

    value: Y | None = None
    result: R | None = None
    failure: BaseException | None = None
    status: Status = Status.CREATED

    def transition(self, status: Status, /) -> None:
        if self.status.terminal:
            raise UseAfterCompletion(f"Computation already {self.status.value}.")
        if status not in TRANSITIONS[self.status]:
            raise InvalidTransition(f"{self.status.value} -> {status.value}")
        self.status = status

    def suspend(self, value: Y, /) -> None:
        self.transition(Status.SUSPENDED)
        self.value = value

    def complete(self, result: R, /) -> None:
        self.transition(Status.COMPLETED)
        self.result = result

    def fail(self, failure: BaseException, /) -> None:
        self.transition(Status.FAILED)
        self.failure = failure

    def reraise(self) -> None:
        """Raise the captured failure, if there is one."""
        if self.failure is not None:
            raise self.failure
