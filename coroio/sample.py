from collections.abc import Generator

from .generator import generator
from .sleep import sleep
from .task import task
from .timer import Timer


@generator
def fibonacci(count: int) -> Generator[int, None, None]:
    a, b = 0, 1
    for _ in range(count):
        yield a
        a, b = b, a + b


@generator
def integers(start: int, end: int) -> Generator[int, None, None]:
    yield from range(start, end)


@generator
def lifecycle() -> Generator[str, None, None]:
    yield "First"
    yield "Second"
    yield "Third"


@task
async def compute_answer() -> int:
    return sum(range(1, 11))


@task
async def format_result(value: int) -> str:
    return f"The answer is: {value}"


@task
async def delayed_computation(
    interval: float = 0.5, *, timer: Timer | None = None
) -> int:
    await sleep(interval, timer=timer)
    return 42
