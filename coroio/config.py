import os
import tomllib
from functools import cache
from pathlib import Path

from .timer import HeapTimer
from .timer import ThreadTimer
from .timer import Timer

TIMERS: dict[str, type[Timer]] = {
    "thread": ThreadTimer,
    "heap": HeapTimer,
}


def pyproject() -> Path | None:
    for path in [cwd := Path.cwd(), *cwd.parents]:
        candidate = path / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def config() -> dict:
    """Read the ``[tool.coroio]`` table of the nearest pyproject.toml."""
    if path := pyproject():
        with path.open("rb") as f:
            return tomllib.load(f).get("tool", {}).get("coroio", {})
    return {}


def create_timer(name: str, /) -> Timer:
    if name not in TIMERS:
        raise ValueError(
            f"Unknown timer {name!r}, expected one of: {', '.join(TIMERS)}"
        )
    return TIMERS[name]()


@cache
def default_timer() -> Timer:
    """Get the timer that sleeps use unless given one.

    Set it with the COROIO_TIMER env var or the 'timer' key of
    [tool.coroio] in pyproject.toml. Defaults to 'thread'.
    """
    name = os.environ.get("COROIO_TIMER") or config().get("timer") or "thread"
    return create_timer(name)
