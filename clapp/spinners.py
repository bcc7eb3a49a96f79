"""
Clapp spinners: a cyclic glyph loop on a background thread.

Each Spinner is its own handle: it owns its stop event and its thread, so
starting a second spinner never strands the first one. Stopping is a
handshake: stop() signals the loop and waits until the loop has cleared the
line and exited.

Usage
    with Spinner("fetching").start():
        fetch()

    handle = context.spinner("indexing")
    ...
    handle.stop()
"""
import logging
import threading

from .faults import AnimationStateError, FaultCode
from .terminal import Terminal
from .utils import Unset, coalesce

logger = logging.getLogger("clapp.spinners")

GLYPHS = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
INTERVAL = 0.15
PADDING = 4


class Spinner:
    """
    one spinner handle.

    - label: optional text shown after the glyph
    - terminal: Terminal to draw on (defaults to the process one)
    - glyphs / interval: the cycle and the tick, in seconds
    """

    def __init__(self, label=Unset, /, *, terminal=Unset, glyphs=GLYPHS, interval=INTERVAL):
        if not glyphs:
            raise ValueError("spinner needs at least one glyph")
        self.label = coalesce(label, "")
        self.terminal = Terminal() if terminal is Unset else terminal
        self.glyphs = tuple(glyphs)
        self.interval = interval
        self._lock = threading.Lock()
        self._stopping = threading.Event()
        self._thread = None
        self._stopped = False

    def __repr__(self):
        return "<%s %r running=%s>" % (type(self).__name__, self.label, self.running)

    @property
    def running(self):
        return self._thread is not None and not self._stopped

    def start(self):
        with self._lock:
            if self._thread is not None:
                raise AnimationStateError(
                    "spinner %r was already started" % self.label,
                    title="spinner misuse",
                    code=FaultCode.ANIMATION_MISUSE,
                )
            self._thread = threading.Thread(target=self._spin, name="clapp-spinner", daemon=True)
        self._thread.start()
        logger.debug("spinner %r started", self.label)
        return self

    def stop(self):
        with self._lock:
            if self._thread is None or self._stopped:
                raise AnimationStateError(
                    "spinner %r is not running" % self.label,
                    title="spinner misuse",
                    code=FaultCode.ANIMATION_MISUSE,
                )
            self._stopped = True
        self._stopping.set()
        self._thread.join()
        logger.debug("spinner %r stopped", self.label)

    def __enter__(self):
        if self._thread is None:
            self.start()
        return self

    def __exit__(self, type, value, traceback):
        if self.running:
            self.stop()

    def _frame(self, index):
        glyph = self.glyphs[index % len(self.glyphs)]
        return "%s %s" % (glyph, self.label) if self.label else glyph

    def _spin(self):
        index = 0
        while True:
            self.terminal.print_inline(self._frame(index))
            if self._stopping.wait(self.interval):
                break
            index += 1
        self.terminal.print_inline(" " * (len(self.label) + PADDING))
        self.terminal.print_inline("")


__all__ = (
    "Spinner",
    "GLYPHS",
    "INTERVAL",
)
