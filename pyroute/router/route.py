from __future__ import annotations

from typing import Optional

from pyroute.core.core import VNode, component, hooks
from pyroute.core.provider import create_context
from .match import MatchResult, ParamMap, match_route
from .pattern import Pattern
from .router import Router, use_location_from_router, use_router
from .scope import EMPTY_PARAMS, Scope, merge_params, use_cached_params
from .switch import resolve_switch, route_like

ParamsContext = create_context(default=EMPTY_PARAMS, name="Params")


def use_params() -> ParamMap:
    """Parameters of the closest matching ``Route``, merged with its ancestors'."""
    return hooks.use_context(ParamsContext)


def use_route(pattern: Optional[Pattern]) -> MatchResult:
    router = use_router()
    path, _ = use_location_from_router(router)
    return match_route(router.parser, pattern, path)


def _route_body(component_fn, children, params: ParamMap):
    if component_fn is not None:
        return component_fn(params=params)
    if callable(children) and not isinstance(children, VNode):
        return children(params)
    return children


@route_like
@component
def Route(*, path=None, nest=False, match=None, component=None, children=None):
    """Render ``children`` (or ``component``) while ``path`` matches.

    ``match`` is a precomputed result, as handed down by ``Switch``. With
    ``nest`` the pattern matches a prefix and descendants see the rest of the
    path beneath a new base.
    """
    router = use_router()
    location, _ = use_location_from_router(router)
    scope = Scope(router.base, path, nest)
    result = match if match is not None else scope.match(router.parser, location)

    params = use_cached_params(merge_params(use_params(), result.params))
    if not result.matched:
        return None

    body = _route_body(component, children, params)
    nested_base = scope.nested_base(result)
    if nested_base:
        body = Router(base=nested_base, children=body)
    return ParamsContext(value=params, children=body)


@component
def Switch(*, children=None, location=None):
    """Render only the first route-like child whose pattern matches."""
    router = use_router()
    path, _ = use_location_from_router(router)

    found = resolve_switch(children, location or path, router.parser)
    if found is None:
        return None

    candidate, result = found
    chosen = candidate.vnode
    # a different winner is a different child, never a reused one
    key = chosen.key if chosen.key is not None else f"__switch_{candidate.index}"
    return VNode(chosen.component_fn, {**chosen.props, "match": result}, key=key)


@component
def Redirect(*, to=None, href=None, replace=False, state=None):
    """Navigate to ``to`` once mounted.

    Without a live history (``ssr_path`` routers) the target is recorded in the
    router's ``SsrContext`` while rendering instead.
    """
    router = use_router()
    _, navigate = use_location_from_router(router)
    target = to if to is not None else href

    def redirect():
        navigate(target, replace=replace, state=state)

    hooks.use_effect(redirect, [])

    if router.is_static:
        redirect()
    return None
