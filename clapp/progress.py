"""
Clapp progress bars: percent-driven, eased, cancellable render loop.

What this module provides
- ProgressBar: a bar of `width` blocks animated by a background thread.
  • init()          spawn the consumer thread (UNINITIALIZED → IDLE)
  • render()        animate from the previous percent to the current one
  • update(p)       set the current percent, then render()
  • cancel()        stop immediately, dropping whatever is left to play
  • stop()          finish cleanly; returns once the last frame is flushed
  • context manager: init on enter, stop on clean exit, cancel on error
- Easing: linear / ease-in / ease-out frame timing.
- block_count / frames_for_range / line_for_percent: the bar geometry.

State machine
    UNINITIALIZED → IDLE ⇄ RENDERING → CANCELLED | DONE

- every operation checks the state first and raises AnimationStateError when
  it is not valid there (render before init, render after stop, double
  cancel, ...). CANCELLED and DONE are terminal: a torn-down bar stays dead.

Channels
- frame queue: tagged messages Frames(lines) | Cancel() | Done(), consumed in
  order by the bar's single thread, which is the only writer of its output.
- rendering gate: a one-slot semaphore. render() takes it before enqueueing a
  batch and the consumer gives it back once the batch has drained, so a second
  render() waits for the first batch to finish and batches never interleave.
- cancel signal: an event checked between frames; inter-frame sleeps wait on
  it, so cancel() preempts the running batch at the next frame boundary.
- completion signal: an event set after the final blank line is printed;
  stop() joins the consumer, and `completed` reports the event.

Output errors
- an exception raised while drawing (a broken pipe, say) ends the consumer:
  the bar becomes CANCELLED and the gate is given back. stop() and a clean
  context exit re-raise the error; any later operation raises
  AnimationStateError chained to it.

Geometry
- block_count(p) = floor(p * width / 100), the exact form of p / (100 / width)
- frames_for_range(start, end) yields one line per block index between the
  two block counts, inclusive, walking down when end < start. Every line shows
  `start` except the last one, which shows `end`.

Timing
- linear: duration / frame count per frame.
- eased: the sleep before frame i+1 is f(i+1) - f(i) where f is the
  cumulative quadratic curve over the batch, so the total stays `duration`.
  Sleeps are the inverse of speed, hence ease-in animates with the ease-out
  curve and the other way round.
"""
import logging
import math
import queue
import threading
from collections import namedtuple
from enum import Enum, StrEnum

from rich.text import Text

from .faults import AnimationStateError, FaultCode
from .terminal import Terminal
from .utils import Unset

logger = logging.getLogger("clapp.progress")


class Easing(StrEnum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"


class BarState(Enum):
    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    RENDERING = "rendering"
    CANCELLED = "cancelled"
    DONE = "done"


def ease_in(t, b, c, d, /):
    t = t / d
    return c * t * t + b


def ease_out(t, b, c, d, /):
    t = t / d
    return -c * t * (t - 2) + b


class Frames(namedtuple("Frames", ("lines",))):
    __slots__ = ()


class Cancel(namedtuple("Cancel", ())):
    __slots__ = ()


class Done(namedtuple("Done", ())):
    __slots__ = ()


def format_percent(percent, /):
    """
    one decimal place, trailing '.0' suppressed: 50.0 → '50', 12.5 → '12.5'.
    """
    return ("%.1f" % percent).removesuffix(".0")


class ProgressBar:
    """
    Percent-driven progress bar with a background render loop.

    Configuration
    - width: number of blocks (default 50)
    - duration: seconds one render() batch takes to play (default 0.5)
    - easing: Easing or its string value (default linear)
    - empty / fill: glyphs for empty and filled blocks ('-' / '#')
    - fill_color / background_color: rich colors for the blocks and brackets
    - terminal: Terminal the consumer writes to (defaults to the process one)

    Usage
        bar = ProgressBar(width=20)
        bar.init()
        for percent in (25, 50, 100):
            bar.update(percent)
        bar.stop()
    """

    def __init__(
            self,
            *,
            width=50,
            duration=0.5,
            easing=Easing.LINEAR,
            empty="-",
            fill="#",
            fill_color="white",
            background_color="white",
            terminal=Unset,
    ):
        if not isinstance(width, int) or width < 1:
            raise ValueError("progress bar width must be a positive integer")
        if duration < 0:
            raise ValueError("progress bar duration cannot be negative")
        self.width = width
        self.duration = duration
        self.easing = Easing(easing)
        self.empty = empty
        self.fill = fill
        self.fill_color = fill_color
        self.background_color = background_color
        self.terminal = Terminal() if terminal is Unset else terminal

        self._lock = threading.Lock()
        self._state = BarState.UNINITIALIZED
        self._previous = 0.0
        self._current = 0.0
        self._frames = None
        self._gate = None
        self._cancelled = None
        self._completed = None
        self._thread = None
        self._error = None
        self._drawn = 0

    def __repr__(self):
        return "<%s width=%d state=%s %s%%>" % (
            type(self).__name__, self.width, self._state.value, format_percent(self._current)
        )

    @property
    def state(self):
        return self._state

    @property
    def previous(self):
        with self._lock:
            return self._previous

    @property
    def current(self):
        with self._lock:
            return self._current

    @current.setter
    def current(self, percent):
        with self._lock:
            self._current = float(percent)

    @property
    def completed(self):
        """
        True once stop() has seen the final frame flushed.
        """
        return self._completed is not None and self._completed.is_set()

    # geometry

    def block_count(self, percent, /):
        return math.floor(percent * self.width / 100)

    def line_for_percent(self, index, percent, /):
        """
        one rendered frame: '[' + filled × index + empty × (width - index) + '] ' + percent.
        """
        return Text.assemble(
            ("[", self.background_color),
            (self.fill * index, self.fill_color),
            (self.empty * (self.width - index), self.background_color),
            ("] ", self.background_color),
            format_percent(percent) + "%",
        )

    def frames_for_range(self, start, end, /):
        first = self.block_count(start)
        last = self.block_count(end)
        step = 1 if last >= first else -1
        return [
            self.line_for_percent(index, end if index == last else start)
            for index in range(first, last + step, step)
        ]

    def delay(self, index, count, /):
        """
        seconds to wait after frame `index` of a `count`-frame batch.
        """
        match self.easing:
            case Easing.EASE_IN:
                curve = ease_out
            case Easing.EASE_OUT:
                curve = ease_in
            case _:
                return self.duration / count
        return curve(index + 1, 0, self.duration, count) - curve(index, 0, self.duration, count)

    # state machine

    def _expect(self, operation, *states):
        if self._state not in states:
            raise AnimationStateError(
                "cannot %s a progress bar that is %s" % (operation, self._state.value),
                title="progress bar misuse",
                code=FaultCode.ANIMATION_MISUSE,
                state=self._state,
            ) from self._error

    def init(self):
        with self._lock:
            self._expect("initialize", BarState.UNINITIALIZED)
            self._frames = queue.Queue()
            self._gate = threading.BoundedSemaphore(1)
            self._cancelled = threading.Event()
            self._completed = threading.Event()
            self._thread = threading.Thread(target=self._consume, name="clapp-progress", daemon=True)
            self._state = BarState.IDLE
        self._thread.start()
        logger.debug("progress bar started (width=%d, easing=%s)", self.width, self.easing)
        return self

    def render(self):
        """
        enqueue the frames from the previous percent to the current one.

        blocks while an earlier batch of this bar is still playing.
        """
        with self._lock:
            self._expect("render", BarState.IDLE, BarState.RENDERING)
        self._gate.acquire()
        with self._lock:
            try:
                self._expect("render", BarState.IDLE, BarState.RENDERING)
            except AnimationStateError:
                self._gate.release()
                raise
            lines = self.frames_for_range(self._previous, self._current)
            self._frames.put(Frames(tuple(lines)))
            self._previous = self._current

    def update(self, percent, /):
        self.current = percent
        self.render()

    def cancel(self):
        with self._lock:
            self._expect("cancel", BarState.IDLE, BarState.RENDERING)
            self._state = BarState.CANCELLED
            self._cancelled.set()
            self._frames.put(Cancel())
        logger.debug("progress bar cancelled")

    def stop(self):
        with self._lock:
            self._expect("stop", BarState.IDLE, BarState.RENDERING)
            self._state = BarState.DONE
            self._frames.put(Done())
        self._thread.join()
        if self._error is not None:
            raise self._error
        logger.debug("progress bar stopped")

    def __enter__(self):
        if self._state is BarState.UNINITIALIZED:
            self.init()
        return self

    def __exit__(self, type, value, traceback):
        if self._state not in (BarState.IDLE, BarState.RENDERING):
            if type is None and self._error is not None:
                raise self._error
            return
        if type is None:
            self.stop()
        else:
            self.cancel()

    # consumer thread

    def _play(self, lines):
        """
        print one batch; return False when a cancel cut it short.
        """
        with self._lock:
            if self._state is BarState.IDLE:
                self._state = BarState.RENDERING
        try:
            for index, line in enumerate(lines):
                if self._cancelled.is_set():
                    return False
                self.terminal.print_inline(" " * self._drawn)
                self.terminal.print_inline(line)
                self._drawn = len(line)
                if self._cancelled.wait(self.delay(index, len(lines))):
                    return False
            return not self._cancelled.is_set()
        finally:
            with self._lock:
                if self._state is BarState.RENDERING:
                    self._state = BarState.IDLE

    def _consume(self):
        holding = False
        try:
            while True:
                message = self._frames.get()
                match message:
                    case Frames(lines=lines):
                        holding = True
                        played = self._play(lines)
                        holding = False
                        self._gate.release()
                        if played:
                            continue
                        self.terminal.print("")
                        return
                    case Cancel():
                        self.terminal.print("")
                        return
                    case Done():
                        self.terminal.print("")
                        self._completed.set()
                        return
        except Exception as error:
            # re-raised by stop(), chained by later operations
            with self._lock:
                self._error = error
                self._state = BarState.CANCELLED
            self._cancelled.set()
            logger.debug("progress bar output failed: %r", error)
        finally:
            if holding:
                self._gate.release()


__all__ = (
    "Easing",
    "BarState",
    "ProgressBar",
    "Frames",
    "Cancel",
    "Done",
    "ease_in",
    "ease_out",
    "format_percent",
)
