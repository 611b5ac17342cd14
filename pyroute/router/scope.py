"""Nested routing scopes: bases, relative paths and inherited parameters."""

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from pyroute.core.core import hooks
from .match import MatchResult, ParamMap, Parser, match_route
from .pattern import Pattern

# decodeURI leaves these escaped so a decoded string can't change its own structure
_URI_RESERVED = frozenset(";/?:@&=+$,#")
_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")
_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

ABSOLUTE_MARKER = "~"

EMPTY_PARAMS: ParamMap = {}


def relative_path(base: str, path: str) -> str:
    """``path`` as seen beneath ``base``; ``~path`` when the base does not apply."""
    if path.lower().startswith(base.lower()):
        return path[len(base):] or "/"
    return ABSOLUTE_MARKER + path


def absolute_path(to: str, base: str = "") -> str:
    """Resolve a navigation target; ``~/x`` escapes the base."""
    if to.startswith(ABSOLUTE_MARKER):
        return to[len(ABSOLUTE_MARKER):]
    return base + to


def unescape(value: str) -> str:
    """Percent-decode like ``decodeURI``: reserved characters stay escaped and
    malformed input is returned untouched."""
    if _STRAY_PERCENT.search(value):
        return value

    def decode(m: re.Match) -> str:
        raw = m.group(0)
        escapes = [raw[i:i + 3] for i in range(0, len(raw), 3)]
        text = bytes(int(e[1:], 16) for e in escapes).decode("utf-8")

        out = []
        pos = 0
        for ch in text:
            width = len(ch.encode("utf-8"))
            out.append("".join(escapes[pos:pos + width]) if ch in _URI_RESERVED else ch)
            pos += width
        return "".join(out)

    try:
        return _ESCAPE_RUN.sub(decode, value)
    except UnicodeDecodeError:
        return value


def _is_positional(key: str) -> bool:
    return key.isdigit()


def merge_params(outer: Mapping[str, Optional[str]], inner: Optional[ParamMap]) -> ParamMap:
    """Params visible beneath a scope: outer names overridden by inner ones.

    Positional keys come from the innermost scope only.
    """
    merged = {k: v for k, v in outer.items() if not _is_positional(k)}
    if inner:
        merged.update(inner)
    return merged


def same_params(a: Mapping, b: Mapping) -> bool:
    if len(a) != len(b):
        return False
    return all(k in b and b[k] == v for k, v in a.items())


def use_cached_params(value: ParamMap) -> ParamMap:
    """Return the previous params object while the contents stay shallow-equal."""
    ref = hooks.use_ref(EMPTY_PARAMS)
    if not same_params(value, ref.current):
        ref.current = value
    return ref.current


@dataclass(frozen=True)
class Scope:
    """A nesting boundary: a pattern matched beneath ``parent_base``.

    When ``nesting`` is set the pattern matches loosely and the matched prefix
    extends the base seen by descendants.
    """

    parent_base: str = ""
    pattern: Optional[Pattern] = None
    nesting: bool = False

    def match(self, parser: Parser, path: str) -> MatchResult:
        """Match ``path`` (already relative to ``parent_base``)."""
        return match_route(parser, self.pattern, path, self.nesting)

    def nested_base(self, result: MatchResult) -> str:
        """The prefix descendants add to ``parent_base``; empty unless nesting matched."""
        return result.base if self.nesting and result.matched else ""
