"""
Clapp invocation context: what a handler receives.

A Context is created per run by App.run() and carries
- flags: the parsed flag namespace (canonical name → value)
- captures: the bindings produced by the matching route
- terminal: the plain / inline / error printing primitives
- the owning app, for flag defaults, usage and version rendering

Lookups
- flag(name): leading dashes are ignored; the flag's default applies only when
  no explicit non-empty value was given; otherwise the value, or "".
- arg(name): the capture bound under `name`; a name containing spaces falls
  back to its underscored form ('file name' → 'file_name'); otherwise "".

Failing
- fail(message, status=1) prints the highlighted message on stderr and returns
  a HandlerFailure. Handlers return it (`return context.fail(...)`) and the app
  turns it into the exit status; nothing unwinds the stack. A failure that
  was reported but not returned still sets the status (see Context.failure).

Animations
- progress(**options) builds an uninitialized ProgressBar with the app's
  defaults, drawing on this context's terminal.
- spinner(label) starts and returns a new Spinner handle.
"""
from .faults import HandlerFailure, FaultCode, trigger
from .flags import strip_dashes
from .progress import ProgressBar
from .spinners import Spinner
from .utils import Unset, mirror


class Context:
    __slots__ = ("_app", "_flags", "_captures", "_failure", "terminal")

    flags = mirror("flags")
    captures = mirror("captures")

    def __init__(self, app, flags, /, captures=None, *, terminal=Unset):
        self._app = app
        self._flags = dict(flags)
        self._captures = dict(captures or {})
        self._failure = None
        self.terminal = app.terminal if terminal is Unset else terminal

    def __repr__(self):
        return "<%s flags=%r captures=%r>" % (type(self).__name__, self._flags, self._captures)

    @property
    def app(self):
        return self._app

    @property
    def failure(self):
        """
        the last HandlerFailure reported through fail(), or None.
        """
        return self._failure

    def flag(self, name, /):
        name = strip_dashes(name)
        value = self._flags.get(name, "")
        if not value:
            default = self._app.default(name)
            if default is not Unset and default != "":
                return default
        return value

    def arg(self, name, /):
        try:
            return self._captures[name]
        except KeyError:
            pass
        if " " in name:
            return self._captures.get(name.replace(" ", "_"), "")
        return ""

    # printing primitives

    def print(self, *objects, **options):
        self.terminal.print(*objects, **options)

    def print_inline(self, renderable, /):
        self.terminal.print_inline(renderable)

    def print_error(self, *objects, **options):
        self.terminal.print_error(*objects, **options)

    def print_intro(self):
        self.terminal.print(self._app.render_intro())

    def print_usage(self):
        self.terminal.print(self._app.render_usage())

    def show_usage(self):
        self.print_intro()
        self.print_usage()

    def show_version(self):
        self.terminal.print(self._app.render_version())

    def fail(self, message, /, status=1, **options):
        """
        report a handler failure and return it for the handler to return.

        the context also keeps it, so App.run exits with its status even when
        the handler drops the returned value.
        """
        failure = HandlerFailure(
            message,
            title=options.pop("title", "command failed"),
            code=FaultCode.HANDLER_FAILURE,
            status=status,
            **options,
        )
        trigger(failure, console=self.terminal.stderr, prog=self._app.name, colorful=self._app.colorful)
        self._failure = failure
        return failure

    # animations

    def progress(self, **options):
        return ProgressBar(**{**self._app.progress, "terminal": self.terminal, **options})

    def spinner(self, label=Unset, /, **options):
        return Spinner(label, terminal=self.terminal, **options).start()


__all__ = ("Context",)
