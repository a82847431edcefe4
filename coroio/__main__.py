import logging
from typing import Annotated

from typer import BadParameter
from typer import Option
from typer import Typer

from .config import create_timer
from .config import default_timer
from .sample import compute_answer
from .sample import delayed_computation
from .sample import fibonacci
from .sample import format_result
from .sample import integers
from .sample import lifecycle

app = Typer()


@app.callback()
def main(
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Log every suspension and resume.")
    ] = False,
):
    """Exercise the coroio generators and tasks."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(threadName)s %(name)s: %(message)s",
        )


@app.command()
def demo(
    timer: Annotated[
        str | None,
        Option(
            help="Timer that resumes sleeping tasks: 'thread' or 'heap'. "
            "Defaults to COROIO_TIMER or [tool.coroio] in pyproject.toml.",
        ),
    ] = None,
):
    """Run each sample generator and task and print what it produces."""
    try:
        chosen = default_timer() if timer is None else create_timer(timer)
    except ValueError as error:
        raise BadParameter(str(error), param_hint="--timer") from error

    with fibonacci(7) as numbers:
        print("Fibonacci numbers:", *numbers)

    with integers(5, 10) as numbers:
        print("Numbers in range:", *numbers)

    with compute_answer() as answer:
        print(f"Simple task: {answer.await_result()}")

    with compute_answer() as answer, format_result(answer.await_result()) as message:
        print(f"Task chain: {message.await_result()}")

    with delayed_computation(timer=chosen) as delayed:
        print("Delayed task created, waiting for result...")
        print(f"Delayed result: {delayed.await_result()}")

    with lifecycle() as steps:
        while steps.advance():
            print(f"Lifecycle value: {steps.current()}")
        print("Lifecycle completed")


if __name__ == "__main__":
    app()
