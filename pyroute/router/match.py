import re
from typing import Callable, Dict, NamedTuple, Optional

from pyroute.errors import MatchTypeError
from .pattern import CompiledMatcher, Pattern, compile_pattern

ParamMap = Dict[str, Optional[str]]
Parser = Callable[[Pattern, bool], CompiledMatcher]

# routes declared without a pattern behave like a wildcard over the remaining path
CATCH_ALL = "*"


class MatchResult(NamedTuple):
    matched: bool
    params: Optional[ParamMap]
    base: str = ""


NO_MATCH = MatchResult(False, None, "")


def match_route(
    parser: Parser, pattern: Optional[Pattern], path: str, loose: bool = False
) -> MatchResult:
    """Match ``path`` against ``pattern`` and extract its parameters.

    Every group is exposed under its position (``"0"``, ``"1"``, ...) and, when
    known, under its name. Optional groups that did not participate map to
    ``None``. For loose matches ``base`` is the consumed prefix.
    """
    if pattern is None:
        pattern = CATCH_ALL

    if isinstance(pattern, re.Pattern):
        compiled = CompiledMatcher(pattern, None)
    elif isinstance(pattern, str):
        compiled = CompiledMatcher._make(parser(pattern, loose))
    else:
        raise MatchTypeError(pattern)

    m = compiled.pattern.match(path)
    if m is None:
        return NO_MATCH

    groups = m.groups()
    params: ParamMap = {str(i): value for i, value in enumerate(groups)}
    if compiled.keys is None:
        params.update(m.groupdict())
    else:
        params.update(zip(compiled.keys, groups))

    return MatchResult(True, params, m.group(0) if loose else "")


def matches(pattern: Pattern, path: str, loose: bool = False) -> bool:
    """Convenience function that only returns a boolean match result."""
    return match_route(compile_pattern, pattern, path, loose).matched
