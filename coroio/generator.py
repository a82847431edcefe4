from collections.abc import Callable
from collections.abc import Generator as BaseGenerator
from collections.abc import Iterator
from functools import wraps
from typing import Any
from typing import Self
from typing import cast

from .errors import Released
from .errors import UseAfterCompletion
from .handle import Handle
from .state import Status


class Generator[T](Iterator[T]):
    """A lazy producer that runs its body only when asked for a value.

    Nothing runs at construction. Each ``advance()`` runs the body up to
    its next ``yield`` and reports whether a value is ready to be read
    with ``current()``.
    """

    def __init__(
        self,
        body: BaseGenerator[T, Any, Any] | Handle[T, Any],
        /,
        *,
        name: str | None = None,
    ):
        if isinstance(body, Handle):
            self.__handle = body
        elif isinstance(body, BaseGenerator):
            self.__handle = Handle[T, Any](body, name=name)
        else:
            raise TypeError(f"Generator bodies must be generators, got {body!r}")
        self.__ready = False

    def __repr__(self):
        return f"<{type(self).__name__} {self.__handle.name!r}>"

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied, use transfer().")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied, use transfer().")

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args, **kwargs):
        self.release()

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        match self.__handle.status:
            case Status.COMPLETED:
                raise StopIteration
            case Status.FAILED:
                self.__handle.state.reraise()
        if not self.advance():
            raise StopIteration
        return self.current()

    def advance(self) -> bool:
        """Run to the next yield, returning whether it produced a value."""
        self.__ready = False
        self.__handle.resume()
        state = self.__handle.state
        match state.status:
            case Status.SUSPENDED:
                self.__ready = True
                return True
            case Status.FAILED:
                state.reraise()
        return False

    def current(self) -> T:
        """Read the value produced by the most recent ``advance()``."""
        if self.__handle.released:
            raise Released(f"{self!r} has been released.")
        state = self.__handle.state
        state.reraise()
        if not self.__ready:
            raise UseAfterCompletion(
                f"{self!r} has no value ready, advance() must return True first."
            )
        return cast(T, state.value)

    def release(self) -> None:
        self.__ready = False
        self.__handle.release()

    def transfer(self) -> Self:
        """Move the running body into a new generator, releasing this one."""
        generator = type(self)(self.__handle.transfer())
        generator.__ready = self.__ready
        self.__ready = False
        return generator


def generator[**A, T](
    fn: Callable[A, BaseGenerator[T, Any, Any]],
) -> Callable[A, Generator[T]]:
    """Decorate a generator function to return a ``Generator``."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Generator[T]:
        return Generator(fn(*args, **kwargs), name=fn.__qualname__)

    return wrapper
