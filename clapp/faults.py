"""
Clapp faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface any fault on the error console.
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- routing
  • UnknownCommandError: no registered pattern fits the positional tokens. The
    router itself never raises; it returns NotFound and the app turns that
    into this fault plus usage and a non-zero exit.
- handlers
  • HandlerFailure: the recoverable “fail” value a handler returns through
    Context.fail(); carries the exit status the app should report.
- animation
  • AnimationStateError: a progress bar or spinner operation that is invalid
    for the current state (render after stop, double cancel, ...).
- patterns (warnings)
  • InvalidPatternWarning: a typed capture whose expression does not compile;
    the capture simply never matches.

Integration
- Rendering goes through rich; hosts can override the palette with a
  __styles__ mapping, the code labels with __codes__ and the program name with
  __prog__, all looked up on __main__.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .terminal import error_console as console
from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across clapp (stable identifiers).

    grouping
    - routing (111xx): UNKNOWN_COMMAND
    - handlers (113xx): HANDLER_FAILURE
    - animation (115xx): ANIMATION_MISUSE
    - warnings (12xxx): INVALID_PATTERN

    normalize() allows the host to remap codes to custom labels while keeping
    the numeric identity stable.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- handler errors (11xxx) ---
    HANDLER_FAILURE             = 11131

    # --- animation errors (11xxx) ---
    ANIMATION_MISUSE            = 11151

    # --- warnings (12xxx) ---
    INVALID_PATTERN             = 12121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", options.get("prog", "clapp"))
    code = options.get("code", fault.__faultcode__)

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize(), "code"),
        " | ",
        text(options.get("title", type(fault).__name__).title(), title_style),
        " ]"
    )
    message = text(fault.message, message_style)
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
    if docs := options.get("docs"):
        renders.append(text(docs, "docs"))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class CommandException(Exception):
    """
    base of every clapp error.

    message is the one-sentence body; options carry rendering context (title,
    code, hint, prog, colorful, fancy, console) and domain payload (status for
    handler failures, state for animation errors).
    """
    __faultcode__ = FaultCode.UNKNOWN_COMMAND

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "bold #FF5F5F",  # highlighted failure message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
            "docs": "#8A8A99 dim",
        }, "error-title", "error-message")

    def __str__(self):
        return str(self.message)

    def __trigger__(self):
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException):
    __faultcode__ = FaultCode.UNKNOWN_COMMAND


class HandlerFailure(CommandException):
    """
    recoverable failure returned by a handler (see Context.fail).

    the exit status lives in options["status"] (defaults to 1). nothing is
    raised: the handler returns this value and the app converts it into the
    process exit code once the handler has unwound normally.
    """
    __faultcode__ = FaultCode.HANDLER_FAILURE

    @property
    def status(self):
        return self.options.get("status", 1)


class AnimationStateError(CommandException):
    __faultcode__ = FaultCode.ANIMATION_MISUSE


class CommandWarning(Warning):
    __faultcode__ = FaultCode.INVALID_PATTERN

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",

            # body
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
            "docs": "#8A8A99 dim",
        }, "warning-title", "warning-message")

    def __str__(self):
        return str(self.message)

    def __trigger__(self):
        warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidPatternWarning(CommandWarning):
    __faultcode__ = FaultCode.INVALID_PATTERN


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - errors are printed on the error console, warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; when not found, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "HandlerFailure",
    "AnimationStateError",
    "CommandWarning",
    "InvalidPatternWarning",
    "trigger",
    "getdoc",
)
