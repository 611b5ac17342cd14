from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple

from pyroute.core.core import VNode
from .match import MatchResult, Parser, match_route
from .pattern import Pattern

# components whose nodes a Switch may choose between
_ROUTE_LIKE: set = set()


def route_like(fn: Callable) -> Callable:
    """Register a component as selectable by :func:`resolve_switch`."""
    _ROUTE_LIKE.add(fn)
    return fn


def is_route_like(node: Any) -> bool:
    return isinstance(node, VNode) and node.component_fn in _ROUTE_LIKE


@dataclass(frozen=True)
class Candidate:
    vnode: VNode
    index: int
    pattern: Optional[Pattern]
    nest: bool = False


def flatten_children(children: Any) -> Iterator[Any]:
    if isinstance(children, (list, tuple)):
        for child in children:
            yield from flatten_children(child)
    elif children is not None:
        yield children


def as_candidate(node: Any, index: int) -> Optional[Candidate]:
    if not is_route_like(node):
        return None
    props = node.props
    return Candidate(node, index, props.get("path"), bool(props.get("nest", False)))


def resolve_switch(
    children: Iterable[Any] | Any, location: str, parser: Parser
) -> Optional[Tuple[Candidate, MatchResult]]:
    """First route-like child, in declaration order, whose pattern matches ``location``."""
    index = 0
    for node in flatten_children(children):
        candidate = as_candidate(node, index)
        if candidate is None:
            continue
        index += 1
        result = match_route(parser, candidate.pattern, location, candidate.nest)
        if result.matched:
            return candidate, result
    return None
