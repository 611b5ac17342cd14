import re
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple, Union

from pyroute.errors import MatchTypeError, PatternError

Pattern = Union[str, "re.Pattern[str]"]

_PARAM = re.compile(
    r"^:(?P<name>[A-Za-z0-9_$-]+)(?:(?P<mod>[?*+])|(?P<ext>(?:\.[A-Za-z0-9_-]+)+))?$"
)
_RESERVED = (":", "*", "?")


class CompiledMatcher(NamedTuple):
    """A matching rule plus the parameter names of its groups, in order.

    ``keys`` is ``None`` for precompiled regexes: their own group names are used.
    """

    pattern: "re.Pattern[str]"
    keys: Optional[Tuple[str, ...]]


def _compile_segment(raw: str, segment: str) -> Tuple[str, Optional[str]]:
    if segment == "*":
        return "/(.*)", "*"
    if segment == "*?":
        return "(?:/(.*))?", "*"

    if segment.startswith(":"):
        m = _PARAM.match(segment)
        if m is None:
            raise PatternError(raw, f"malformed parameter segment {segment!r}")
        name, mod, ext = m.group("name", "mod", "ext")
        if mod == "?":
            return "(?:/([^/]+?))?", name
        if mod == "*":
            return "/(.*)", name
        if mod == "+":
            return "/(.+)", name
        if ext:
            return "/([^/]+?)" + re.escape(ext), name
        return "/([^/]+?)", name

    if any(ch in segment for ch in _RESERVED):
        raise PatternError(raw, f"reserved character in literal segment {segment!r}")
    return "/" + re.escape(segment), None


def _parse(raw: str, loose: bool) -> CompiledMatcher:
    body = []
    keys = []
    for segment in raw.split("/"):
        if not segment:
            continue
        chunk, key = _compile_segment(raw, segment)
        body.append(chunk)
        if key is not None:
            keys.append(key)

    tail = r"(?=$|/)" if loose else r"/?$"
    return CompiledMatcher(re.compile("^" + "".join(body) + tail, re.IGNORECASE), tuple(keys))


@lru_cache(maxsize=None)
def _compile_cached(pattern, loose: bool) -> CompiledMatcher:
    if isinstance(pattern, re.Pattern):
        return CompiledMatcher(pattern, None)
    return _parse(pattern, loose)


def compile_pattern(pattern: Pattern, loose: bool = False) -> CompiledMatcher:
    """Compile a route template into a :class:`CompiledMatcher`.

    Segments:
    - ``literal`` matches verbatim (case-insensitive)
    - ``:name`` one segment, ``:name?`` an optional one, ``:name.ext`` with a suffix
    - ``*`` / ``:name*`` the rest of the path, ``*?`` an optional rest,
      ``:name+`` a non-empty rest
    - ``loose=True`` matches a prefix ending on a segment boundary

    Precompiled regexes are passed through. Results are cached per
    ``(pattern, loose)`` for the life of the process.
    """
    if not isinstance(pattern, (str, re.Pattern)):
        raise MatchTypeError(pattern)
    return _compile_cached(pattern, bool(loose))


def cache_info():
    return _compile_cached.cache_info()
