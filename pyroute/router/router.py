from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Tuple, Union
from urllib.parse import parse_qsl, urlencode

from pyroute.core.core import component, hooks
from pyroute.core.provider import create_context
from pyroute.location.base import Navigate
from pyroute.location.static import StaticLocation
from pyroute.location.store import normalize_search
from .config import DEFAULT_ROUTER, RouterConfig, compose_router
from .scope import absolute_path, relative_path, unescape

RouterContext = create_context(default=DEFAULT_ROUTER, name="Router")

SearchParams = Dict[str, str]
SearchUpdate = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], Callable[[SearchParams], Any]]


@component
def Router(
    *,
    children=None,
    location=None,
    hook=None,
    search_hook=None,
    parser=None,
    base=None,
    hrefs=None,
    around_nav=None,
    ssr_path=None,
    ssr_search=None,
    ssr_context=None,
):
    """Configure routing for a subtree. Unset options are inherited from the
    enclosing router; ``base`` is appended to the enclosing one."""
    parent = hooks.use_context(RouterContext)
    composed = compose_router(
        parent,
        location=location,
        hook=hook,
        search_hook=search_hook,
        parser=parser,
        base=base,
        hrefs=hrefs,
        around_nav=around_nav,
        ssr_path=ssr_path,
        ssr_search=ssr_search,
        ssr_context=ssr_context,
    )

    # descendants keep seeing the same object until a setting actually changes
    ref = hooks.use_ref(composed)
    if ref.current != composed:
        ref.current = composed

    return RouterContext(value=ref.current, children=children)


def use_router() -> RouterConfig:
    return hooks.use_context(RouterContext)


def _static_source(router: RouterConfig) -> StaticLocation:
    return StaticLocation(router.ssr_path, router.ssr_search or "", router.ssr_context)


def use_location_from_router(router: RouterConfig) -> Tuple[str, Navigate]:
    """The path relative to ``router.base`` and a navigate function bound to it.

    Navigation targets are resolved against the base (``~`` escapes it) and
    handed to ``router.around_nav`` before the location source sees them.
    """
    if router.is_static:
        source = _static_source(router)
        path, write = source.current_location().path, source.navigate
    else:
        path, write = router.hook(router)

    def perform(to: str, options: Dict[str, Any]) -> None:
        write(to, **(options or {}))

    def navigate(to: str, **options: Any) -> None:
        router.around_nav(perform, absolute_path(to, router.base), options)

    return unescape(relative_path(router.base, path)), hooks.use_event(navigate)


def use_location() -> Tuple[str, Navigate]:
    return use_location_from_router(use_router())


def use_navigate() -> Navigate:
    return use_location()[1]


def use_search() -> str:
    router = use_router()
    if router.is_static:
        raw = router.ssr_search or ""
    else:
        raw = router.search_hook(router)
    return unescape(normalize_search(raw))


def use_search_params() -> Tuple[SearchParams, Callable[..., None]]:
    """Query parameters as a dict (first value wins) plus a setter.

    The setter takes a mapping, a list of pairs, or a function of the current
    params, and navigates to the current path with the new query.
    """
    path, navigate = use_location()
    search = use_search()
    params = hooks.use_memo(lambda: _parse_search(search), [search])

    def set_search_params(update: SearchUpdate, **options: Any) -> None:
        if callable(update):
            update = update(dict(params))
        pairs = list(update.items()) if isinstance(update, Mapping) else list(update)
        navigate(path + "?" + urlencode(pairs), **options)

    return params, hooks.use_event(set_search_params)


def _parse_search(search: str) -> SearchParams:
    params: SearchParams = {}
    for name, value in parse_qsl(search, keep_blank_values=True):
        params.setdefault(name, value)
    return params


def use_href(to: str) -> str:
    """The ``href`` a link to ``to`` would carry under the current router."""
    router = use_router()
    return router.hrefs(absolute_path(to, router.base))
