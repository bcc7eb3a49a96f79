"""
Clapp routing layer: match positional tokens against registered patterns.

What this module provides
- Route: one registration (pattern string, compiled words, handler, description).
- Router: an immutable, ordered table of routes built once at startup.
  • dispatch(tokens) → Dispatch(handler, captures, route) or NotFound
  • handler_matches(words, tokens) → captures or None (the per-pattern test)
- NotFound: falsy singleton returned when no route matches. It is a normal
  outcome, never an exception; the caller decides on usage text and exit code.

Matching
- tokens are argv-shaped: the first one (the invoked program name) and every
  dash-prefixed token are discarded before matching.
- the remaining count must equal the word count, otherwise the route fails.
- words are checked in lockstep: literal equality, typed capture full match,
  open capture always succeeds and binds.
- routes are tried in registration order and the first full match wins.
  Overlapping patterns are never ranked by specificity: 'build [target]'
  registered before 'build all' shadows it.

Example
    >>> router = Router([
    ...     ("add n:^\\d+$", add),
    ...     ("add [name]", add_named, "add something by name"),
    ... ])
    >>> router.dispatch(["prog", "add", "42"]).captures
    {'n': '42'}
"""
import functools
import logging
from collections import namedtuple
from typing import final

from .flags import split_tokens
from .patterns import compile_pattern, prettify
from .utils import mirror

logger = logging.getLogger("clapp.router")


@final
class NotFoundType:
    """
    singleton outcome of a dispatch that matched nothing.

    falsy, so 'if dispatch := router.dispatch(argv):' reads naturally.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "NotFound"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'NotFoundType' is not an acceptable base type")


NotFound = NotFoundType()


class Route(namedtuple("Route", ("pattern", "words", "handler", "descr"))):
    """
    one registration of the routing table.

    - pattern: the pattern string as registered
    - words: compiled words (see clapp.patterns)
    - handler: callable receiving the invocation Context
    - descr: usage description, None for unlisted routes
    """
    __slots__ = ()

    @classmethod
    def build(cls, pattern, handler, descr=None, /):
        if not callable(handler):
            raise TypeError("route handler for %r must be callable" % (pattern,))
        return cls(pattern, compile_pattern(pattern), handler, descr)

    @property
    def display(self):
        return prettify(self.words)


class Dispatch(namedtuple("Dispatch", ("handler", "captures", "route"))):
    __slots__ = ()


def handler_matches(words, tokens, /):
    """
    test one compiled pattern against argv-shaped tokens.

    returns the captures mapping on a full match, None otherwise. a count
    mismatch (after dropping the program name and dash-prefixed tokens) fails
    before any word is looked at.
    """
    positionals = split_tokens(tokens)
    if len(words) != len(positionals):
        return None

    captures = {}
    for word, token in zip(words, positionals):
        if not word.match(token):
            return None
        if word.binds:
            captures[word.name] = token
    return captures


class Router:
    """
    immutable routing table.

    construction
    - Router(registrations) where each registration is a Route, or a tuple
      (pattern, handler) / (pattern, handler, descr). patterns are compiled
      here, once; order is kept exactly, duplicates included.

    introspection
    - routes: tuple of Route in registration order.
    - commands: (display pattern, descr) pairs for the routes that carry a
      description, in registration order (feeds usage listings).
    """
    __slots__ = ("_routes",)

    routes = mirror("routes")

    def __init__(self, registrations=(), /):
        routes = []
        for registration in registrations:
            if not isinstance(registration, Route):
                registration = Route.build(*registration)
            routes.append(registration)
        self._routes = tuple(routes)

    @property
    def commands(self):
        return tuple((route.display, route.descr) for route in self._routes if route.descr is not None)

    def __len__(self):
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)

    def __repr__(self):
        return "Router(%s)" % ", ".join(repr(route.pattern) for route in self._routes)

    def dispatch(self, tokens, /):
        """
        return the first matching Dispatch, or NotFound.
        """
        tokens = list(tokens)
        for route in self._routes:
            captures = handler_matches(route.words, tokens)
            if captures is not None:
                logger.debug("dispatch %r -> %r %r", tokens, route.pattern, captures)
                return Dispatch(route.handler, captures, route)
        logger.debug("dispatch %r -> not found", tokens)
        return NotFound


__all__ = (
    "NotFoundType",
    "NotFound",
    "Route",
    "Dispatch",
    "Router",
    "handler_matches",
)
