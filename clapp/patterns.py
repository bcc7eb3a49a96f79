r"""
Clapp pattern language: compile command patterns into positional matchers.

Grammar (space is the only separator outside brackets)
- literal          → 'build', 'db', 'migrate'        exact string equality
- [name]           → open capture, any token matches, bound under 'name'
- [multi word]     → one open capture bound under 'multi_word'
- name:regex       → typed capture, the regex must fully match the token

Rules
- bracketed groups are collapsed first (inner spaces become underscores), so
  '[file name]' is a single word; then the pattern is split on single spaces
  and empty pieces are dropped.
- a bracketed word is always an open capture, even if it contains ':'.
- the typed capture splits on the first ':' only, so expressions may contain
  colons themselves ('when:\d\d:\d\d').
- a typed capture whose expression does not compile never matches; an
  InvalidPatternWarning is emitted once, at compile time. When warnings are
  turned into errors the word still compiles, and never matches.

Example
    >>> words = compile_pattern(r"deploy [service name] to:^(staging|prod)$")
    >>> [word.kind.value for word in words]
    ['literal', 'capture', 'typed-capture']
    >>> prettify(words)
    'deploy [service_name] {to}'
"""
import functools
import logging
import re
from collections import namedtuple
from enum import Enum

from .faults import InvalidPatternWarning, FaultCode, trigger

logger = logging.getLogger("clapp.patterns")

_BRACKETS = re.compile(r"\[.*?\]")


class WordKind(Enum):
    LITERAL = "literal"
    CAPTURE = "capture"
    TYPED = "typed-capture"


class Word(namedtuple("Word", ("kind", "text", "name", "regex"))):
    """
    one compiled word of a pattern.

    - kind: WordKind
    - text: the word as written in the pattern (underscored for captures)
    - name: binding name for captures, None for literals
    - regex: compiled expression for typed captures (None when it failed to
      compile, or for other kinds)
    """
    __slots__ = ()

    def match(self, token, /):
        """
        return True when the token satisfies this word.
        """
        match self.kind:
            case WordKind.LITERAL:
                return token == self.text
            case WordKind.CAPTURE:
                return True
            case WordKind.TYPED:
                return self.regex is not None and self.regex.fullmatch(token) is not None

    @property
    def binds(self):
        return self.kind is not WordKind.LITERAL

    @property
    def display(self):
        if self.kind is WordKind.TYPED:
            return "{%s}" % self.name
        return self.text


def _collapse(pattern):
    return _BRACKETS.sub(lambda match: match.group().replace(" ", "_"), pattern)


def _word(piece):
    if piece.startswith("[") and piece.endswith("]") and len(piece) > 1:
        return Word(WordKind.CAPTURE, piece, piece[1:-1], None)

    if ":" in piece:
        name, _, expression = piece.partition(":")
        try:
            regex = re.compile(expression)
        except re.error as error:
            try:
                trigger(InvalidPatternWarning(
                    "typed capture %r has an invalid expression (%s)" % (name, error),
                    title="invalid pattern expression",
                    code=FaultCode.INVALID_PATTERN,
                    hint="this capture will never match; fix the expression after ':'",
                    stacklevel=5,
                ))
            except InvalidPatternWarning:
                # warnings escalated to errors (-W error) must not fail registration
                logger.debug("invalid expression for capture %r: %s", name, error)
            regex = None
        return Word(WordKind.TYPED, piece, name, regex)

    return Word(WordKind.LITERAL, piece, None, None)


@functools.cache
def compile_pattern(pattern, /):
    """
    compile a pattern string into an ordered tuple of Word.

    the result is cached per pattern string: the router compiles every pattern
    once, at construction time.
    """
    if not isinstance(pattern, str):
        raise TypeError("compile_pattern() argument must be a string")
    return tuple(_word(piece) for piece in _collapse(pattern).split(" ") if piece)


def prettify(words, /):
    """
    render compiled words back for usage listings: typed captures as '{name}'.
    """
    return " ".join(word.display for word in words)


__all__ = (
    "WordKind",
    "Word",
    "compile_pattern",
    "prettify",
)
