import copy

import pytest

from .errors import Released
from .errors import UseAfterCompletion
from .generator import Generator
from .generator import generator
from .sample import fibonacci
from .sample import integers
from .sample import lifecycle


def drain(gen: Generator) -> list:
    values = []
    while gen.advance():
        values.append(gen.current())
    return values


def test_fibonacci_yields_seven_terms():
    """The Fibonacci sample yields seven terms, then the eighth advance is False."""
    fib = fibonacci(7)
    values = []
    for _ in range(7):
        assert fib.advance()
        values.append(fib.current())

    assert values == [0, 1, 1, 2, 3, 5, 8]
    assert fib.advance() is False


def test_range_yields_half_open_interval():
    """The integers sample yields start up to, but not including, end."""
    assert drain(integers(5, 10)) == [5, 6, 7, 8, 9]


def test_body_does_not_run_until_advanced():
    """Creating a generator does not run any of its body."""
    trace = []

    @generator
    def body():
        trace.append("started")
        yield 1

    gen = body()
    assert trace == []

    gen.advance()
    assert trace == ["started"]


def test_advance_returns_false_only_once():
    """After advance returns False, advancing again is a contract violation."""
    gen = integers(0, 1)
    assert gen.advance()
    assert gen.advance() is False

    for _ in range(2):
        with pytest.raises(UseAfterCompletion):
            gen.advance()


def test_current_requires_a_successful_advance():
    """Reading before the first advance or after the last is a contract violation."""
    gen = integers(0, 1)
    with pytest.raises(UseAfterCompletion):
        gen.current()

    assert gen.advance()
    assert gen.current() == 0
    assert gen.current() == 0

    assert gen.advance() is False
    with pytest.raises(UseAfterCompletion):
        gen.current()


def test_failure_surfaces_at_advance_and_current():
    """A body failure is raised by advance, then by every current call."""
    error = ValueError("boom")

    @generator
    def body():
        yield 1
        raise error

    gen = body()
    assert gen.advance()
    assert gen.current() == 1

    with pytest.raises(ValueError) as excinfo:
        gen.advance()
    assert excinfo.value is error

    for _ in range(2):
        with pytest.raises(ValueError) as excinfo:
            gen.current()
        assert excinfo.value is error

    with pytest.raises(UseAfterCompletion):
        gen.advance()


def test_next_reraises_failure():
    """Iterating a failed generator raises its failure again rather than stopping."""
    error = ValueError("boom")

    @generator
    def body():
        yield 1
        raise error

    gen = body()
    assert next(gen) == 1
    for _ in range(2):
        with pytest.raises(ValueError) as excinfo:
            next(gen)
        assert excinfo.value is error


def test_lifecycle_yields_then_completes():
    """The lifecycle sample yields three values and completes on the fourth call."""
    assert drain(lifecycle()) == ["First", "Second", "Third"]


def test_generator_is_iterable():
    """Iterating a generator advances it until it completes."""
    gen = fibonacci(5)

    assert list(gen) == [0, 1, 1, 2, 3]
    assert list(gen) == []


def test_release_abandons_body():
    """Releasing a generator closes its body where it is suspended."""
    trace = []

    @generator
    def body():
        try:
            yield 1
            yield 2
        finally:
            trace.append("closed")

    with body() as gen:
        assert gen.advance()

    assert trace == ["closed"]
    with pytest.raises(Released):
        gen.advance()
    with pytest.raises(Released):
        gen.current()


def test_transfer_moves_the_running_body():
    """A transferred generator carries on where the original left off."""
    original = integers(0, 3)
    assert original.advance()

    moved = original.transfer()

    assert moved.current() == 0
    assert drain(moved) == [1, 2]
    with pytest.raises(Released):
        original.advance()


def test_generator_cannot_be_copied():
    """Generators are never duplicated."""
    gen = integers(0, 3)

    with pytest.raises(TypeError):
        copy.copy(gen)
    with pytest.raises(TypeError):
        copy.deepcopy(gen)


def test_generator_requires_a_generator_body():
    """Only generator objects can be driven by a generator."""
    with pytest.raises(TypeError):
        Generator(iter([1, 2, 3]))
