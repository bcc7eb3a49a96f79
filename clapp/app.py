"""
Clapp application layer: register, render and run.

What this module provides
- App: collects flag definitions, aliases and command registrations, builds
  the immutable Router once, and runs an argument vector end to end.
  • handle(pattern, handler, descr) / @handle(pattern, descr)
  • define_flag(name, descr, default)
  • add_alias('-v', '--verbose')
  • run(argv) → exit status (int), main(argv) → sys.exit(run(argv))
  • render_intro / render_usage / render_version: rich renderables

Run flow
- flags are parsed from the whole vector (aliases applied).
- '-h' / '--help' → intro + usage, status 0.
- '--version' → version, status 0.
- first matching route → handler(context); a returned HandlerFailure gives
  its status, as does one reported through context.fail() and
  dropped; anything else gives 0. Exceptions raised by handlers propagate.
- nothing matched and at least one token after the program name → intro,
  highlighted UnknownCommandError on stderr, usage, status 1.
- nothing matched and no tokens → intro + usage, status 0.

Registration closes once the router is built (first run or first access to
.router); later handle()/define_flag()/add_alias() calls raise RuntimeError.

Styling
- palette keys: intro, section, command, command-description, flag-name,
  flag-description, flag-default, version
- define a mapping named __styles__ in __main__ to override any entry; with
  colorful=False every style is dropped.

Example
    app = App("tool", version="1.2.0", descr="does things")
    app.define_flag("--verbose", "talk more")
    app.add_alias("-v", "--verbose")

    @app.handle("greet [name]", "say hello")
    def greet(context):
        context.print("hello %s" % context.arg("name"))

    if __name__ == "__main__":
        app.main()
"""
import difflib
import logging
import sys
from collections import defaultdict

from rich.console import Group
from rich.table import Table
from rich.text import Text

from .context import Context
from .faults import HandlerFailure, UnknownCommandError, FaultCode, trigger, getdoc
from .flags import FlagSpec, check_alias, parse_flags, split_tokens, strip_dashes
from .patterns import WordKind
from .progress import Easing
from .router import Route, Router
from .terminal import Terminal
from .utils import Unset, coalesce, mirror

logger = logging.getLogger("clapp.app")


class App:
    """
    Command-line application: the outer surface around the router.

    Metadata
    - name: program name (used in intro, errors and hints)
    - version: version string shown by --version and the default intro
    - descr: one-line description
    - intro: replaces the default "<name> v<version>" intro line
    - usage: replaces the generated COMMANDS / FLAGS listing

    Runtime
    - colorful: enable rich styling (default True)
    - progress: ProgressBar defaults handed to Context.progress()
    - terminal: Terminal used by contexts (defaults to the process streams)
    """

    routes = mirror("routes")
    flags = mirror("flags")
    aliases = mirror("aliases")

    def __init__(
            self,
            name,
            /,
            *,
            version=Unset,
            descr=Unset,
            intro=Unset,
            usage=Unset,
            colorful=True,
            progress=Unset,
            terminal=Unset,
    ):
        if not isinstance(name, str) or not (name := name.strip()):
            raise ValueError("application name must be a non-empty string")
        self.name = name
        self.version = coalesce(version, "")
        self.descr = coalesce(descr)
        self.intro = coalesce(intro)
        self.usage = coalesce(usage)
        self.colorful = colorful
        self.progress = {
            "width": 50,
            "duration": 0.5,
            "easing": Easing.LINEAR,
            "empty": "-",
            "fill": "#",
            "fill_color": "white",
            "background_color": "white",
        } | coalesce(progress, {})
        self.terminal = Terminal() if terminal is Unset else terminal

        self._routes = []
        self._flags = {}
        self._aliases = {}
        self._router = None

    def __repr__(self):
        return "<%s %r routes=%d flags=%d>" % (type(self).__name__, self.name, len(self._routes), len(self._flags))

    # registration

    def _check_open(self, operation):
        if self._router is not None:
            raise RuntimeError("cannot %s after the router was built" % operation)

    def handle(self, pattern, handler=Unset, descr=None, /):
        """
        register a handler for a pattern, in order.

        forms
        - app.handle("build [target]", build, "build one target")
        - @app.handle("build [target]", "build one target")
        """
        if handler is Unset or isinstance(handler, str):
            descr = coalesce(handler, descr)

            def wrapper(handler):
                self.handle(pattern, handler, descr)
                return handler

            return wrapper

        self._check_open("register a command")
        self._routes.append(Route.build(pattern, handler, descr))
        return handler

    def define_flag(self, name, descr="", default=Unset, /):
        self._check_open("define a flag")
        spec = FlagSpec(name, descr, default)
        self._flags[spec.name] = spec
        return spec

    def add_alias(self, alias, flag, /):
        self._check_open("add an alias")
        alias, flag = check_alias(alias, flag)
        self._aliases[alias] = flag

    def default(self, name, /):
        try:
            return self._flags[strip_dashes(name)].default
        except KeyError:
            return Unset

    @property
    def router(self):
        if self._router is None:
            self._router = Router(self._routes)
            logger.debug("router built with %d routes", len(self._router))
        return self._router

    # rendering

    def _styler(self):
        styles = defaultdict(str, {
            "intro": "bold #E6E6F0",
            "section": "bold underline",
            "command": "bold #36C5F0",
            "command-description": "#9CA3AF",
            "flag-name": "bold #22C55E",
            "flag-description": "#9CA3AF",
            "flag-default": "italic #FFD600",
            "version": "bold #00E6FF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if isinstance(fragment, Text):
                return fragment
            return Text(str(coalesce(fragment, "")), styles[style] if self.colorful else "")

        return text

    def render_intro(self):
        text = self._styler()
        if self.intro is not None:
            return text(self.intro, "intro")
        if self.version:
            return text("%s v%s" % (self.name, self.version), "intro")
        return text(self.name, "intro")

    def render_usage(self):
        text = self._styler()
        if self.usage is not None:
            return text(self.usage)

        renders = [Text(), text("COMMANDS", "section")]
        commands = Table.grid(padding=(0, 4))
        commands.add_column(no_wrap=True)
        commands.add_column()
        for display, descr in self.router.commands:
            commands.add_row(text(display, "command"), text(descr, "command-description"))
        renders.append(commands)

        if flags := [spec for spec in self._flags.values() if spec.descr]:
            renders.extend((Text(), text("FLAGS", "section")))
            table = Table.grid(padding=(0, 4))
            table.add_column(no_wrap=True)
            table.add_column()
            for spec in flags:
                descr = text(spec.descr, "flag-description")
                if spec.default is not Unset and spec.default != "":
                    descr = Text.assemble(descr, " ", text("(default: %s)" % spec.default, "flag-default"))
                table.add_row(text(spec.display, "flag-name"), descr)
            renders.append(table)

        return Group(*renders)

    def render_version(self):
        return self._styler()(self.version, "version")

    # running

    def _suggest(self, tokens):
        positionals = split_tokens(tokens)
        if not positionals:
            return "run '%s --help' to see available commands" % self.name
        heads = {
            route.words[0].text for route in self.router
            if route.words and route.words[0].kind is WordKind.LITERAL
        }
        try:
            suggestion = difflib.get_close_matches(positionals[0], heads, 1)[0]
        except IndexError:
            return "run '%s --help' to see available commands" % self.name
        return "did you mean %r? you can also run '%s --help' to see available commands" % (suggestion, self.name)

    def run(self, argv=Unset, /):
        """
        run one invocation and return its exit status.

        argv is sys.argv-shaped: the first token is the invoked program name.
        """
        argv = list(coalesce(argv, sys.argv))
        flags = parse_flags(argv, self._aliases)
        context = Context(self, flags)

        if context.flag("h") == "1" or context.flag("help") == "1":
            context.show_usage()
            return 0

        if context.flag("version") == "1":
            context.show_version()
            return 0

        if dispatch := self.router.dispatch(argv):
            context = Context(self, flags, dispatch.captures)
            result = dispatch.handler(context)
            if not isinstance(result, HandlerFailure):
                result = context.failure
            if result is not None:
                logger.debug("handler %r failed with status %d", dispatch.route.pattern, result.status)
                return result.status
            return 0

        if len(argv) > 1:
            context.print_intro()
            trigger(
                UnknownCommandError(
                    "“%s” is not a valid command. make sure you typed it correctly." % " ".join(argv[1:]),
                    title="unknown command",
                    code=FaultCode.UNKNOWN_COMMAND,
                    hint=self._suggest(argv),
                    docs=getdoc(FaultCode.UNKNOWN_COMMAND),
                ),
                console=self.terminal.stderr,
                prog=self.name,
                colorful=self.colorful,
            )
            context.print_usage()
            return 1

        context.show_usage()
        return 0

    def main(self, argv=Unset, /):
        sys.exit(self.run(argv))


__all__ = ("App",)
