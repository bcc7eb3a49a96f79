"""
Terminal output primitives shared by the context and the animation engine.

- print(...):        one plain line on stdout
- print_inline(...): carriage return, then the renderable without a newline,
                     so the next inline print redraws over it
- print_error(...):  one line on stderr

Both streams are rich consoles; pass your own (e.g. Console(file=StringIO()))
to capture output. Concurrent writers are not coordinated here: each bar or
spinner funnels its output through its own thread.
"""
from rich.console import Console

from .utils import Unset, coalesce

console = Console()
error_console = Console(stderr=True)


class Terminal:
    __slots__ = ("stdout", "stderr")

    def __init__(self, stdout=Unset, stderr=Unset, /):
        self.stdout = coalesce(stdout, console)
        self.stderr = coalesce(stderr, error_console)

    def print(self, *objects, **options):
        self.stdout.print(*objects, **options)

    def print_inline(self, renderable, /):
        self.stdout.file.write("\r")
        self.stdout.print(renderable, end="", soft_wrap=True, highlight=False, markup=False)
        self.stdout.file.flush()

    def print_error(self, *objects, **options):
        self.stderr.print(*objects, **options)


__all__ = (
    "Terminal",
    "console",
    "error_console",
)
