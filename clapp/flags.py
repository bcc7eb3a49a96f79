"""
Clapp flag layer: split an argument vector into flags and positionals.

What this module provides
- parse_flags(tokens, aliases): left-to-right scan producing a name → value map.
  • '--name=value' / '-n=value' → inline value (split at the first '=')
  • '--name' / '-n'             → presence, recorded as "1" and left “awaiting”
  • the next non-dash token fills an awaiting flag; otherwise it is positional
  • repeated flags overwrite earlier values; unknown flags are accepted silently
- split_tokens(tokens): the positional view consumed by the router (drops the
  invoked program name and every dash-prefixed token).
- strip_dashes(name): canonical flag name (no leading dashes).
- FlagSpec: definition of a documented flag (name, description, default).
- check_alias(alias, flag): validate a 2-character short flag aliasing a long one.

Notes
- Alias keys keep their dash ('-v'); alias values are canonical names ('verbose').
- Flag values are never validated here; lookups with defaults live on the Context.
"""
import logging
from collections import namedtuple

from .utils import Unset

logger = logging.getLogger("clapp.flags")


def strip_dashes(name, /):
    """
    return the canonical flag name: every leading '-' removed.
    """
    return name.lstrip("-")


def parse_flags(tokens, aliases=None, /):
    """
    parse argv-like tokens into a flag namespace.

    parameters
    - tokens: Iterable[str]
      the raw tokens (program name included or not, it is positional anyway).
    - aliases: Mapping[str, str] | None
      short flag ('-v') → canonical long name ('verbose').

    returns
    - dict[str, str]: canonical flag name → value ("1" for presence-only).

    behavior
    - an inline 'key=value' token does not clear a flag still awaiting a value,
      so '-o --mode=fast out.txt' binds 'out.txt' to 'o'.
    """
    aliases = aliases or {}
    results = {}
    awaiting = None

    for token in tokens:
        if token.startswith("-") and "=" in token:
            key, _, value = token.partition("=")
            results[strip_dashes(aliases.get(key, key))] = value
            continue

        if token.startswith("-"):
            awaiting = strip_dashes(aliases.get(token, token))
            results[awaiting] = "1"
            continue

        if awaiting is not None:
            results[awaiting] = token
            awaiting = None

    logger.debug("parsed flags %r", results)
    return results


def split_tokens(tokens, /):
    """
    return the positional tokens the router matches against.

    the first token (the invoked program name) and every dash-prefixed token
    are discarded. flag values given with a space stay in ('--out file build' leaves 'file build').
    """
    return [token for index, token in enumerate(tokens) if index > 0 and not token.startswith("-")]


class FlagSpec(namedtuple("FlagSpec", ("name", "descr", "default"))):
    """
    definition of a documented flag.

    - name: canonical name (dashes stripped on construction)
    - descr: one-line description shown in usage
    - default: value returned by Context.flag() when nothing explicit was given
      (Unset when the flag has no default)
    """
    __slots__ = ()

    def __new__(cls, name, descr="", default=Unset):
        if not isinstance(name, str) or not strip_dashes(name):
            raise ValueError("flag name must be a non-empty string")
        return super().__new__(cls, strip_dashes(name), descr, default)

    @property
    def display(self):
        return "--" + self.name


def check_alias(alias, flag, /):
    """
    validate one alias entry and return it normalized as (alias, canonical name).
    """
    if not isinstance(alias, str) or len(alias) != 2 or not alias.startswith("-") or alias == "--":
        raise ValueError("alias %r must be a dash followed by one character" % (alias,))
    if not isinstance(flag, str) or not strip_dashes(flag):
        raise ValueError("alias target must be a non-empty flag name")
    return alias, strip_dashes(flag)


__all__ = (
    "strip_dashes",
    "parse_flags",
    "split_tokens",
    "FlagSpec",
    "check_alias",
)
