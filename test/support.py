"""
Shared helpers for the behavioral tests: terminals that write into memory.
"""
import errno
import io
import threading

from rich.console import Console

from clapp import Terminal


def console():
    return Console(file=io.StringIO(), color_system=None, width=200, soft_wrap=True)


def terminal():
    return Terminal(console(), console())


def stdout(terminal, /):
    return terminal.stdout.file.getvalue()


def stderr(terminal, /):
    return terminal.stderr.file.getvalue()


def frames(terminal, /):
    """
    split inline output into the non-blank frames that were drawn, in order.
    """
    return [piece.strip() for piece in stdout(terminal).split("\r") if piece.strip()]


class BrokenTerminal(Terminal):
    """
    in-memory terminal whose inline writes fail from the `failing`-th call on.
    """

    def __init__(self, failing, /):
        super().__init__(console(), console())
        self.failing = failing
        self.calls = 0

    def print_inline(self, renderable, /):
        self.calls += 1
        if self.calls >= self.failing:
            raise BrokenPipeError(errno.EPIPE, "broken pipe")
        super().print_inline(renderable)


def settle(operation, /, timeout=2):
    """
    run operation on a helper thread; return (finished, raised exception).
    """
    outcome = []

    def target():
        try:
            operation()
        except Exception as error:
            outcome.append(error)

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    thread.join(timeout)
    return not thread.is_alive(), outcome[0] if outcome else None
