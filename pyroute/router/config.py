from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from pyroute.location.base import LocationSource, Navigate
from pyroute.location.browser import use_browser_location, use_browser_search
from pyroute.location.static import SsrContext
from .match import Parser
from .pattern import compile_pattern

LocationHook = Callable[["RouterConfig"], Tuple[str, Navigate]]
SearchHook = Callable[["RouterConfig"], str]
HrefFormatter = Callable[[str], str]
# around_nav(perform, to, options): perform(to, options) does the actual navigation
AroundNav = Callable[[Callable[[str, Dict[str, Any]], None], str, Dict[str, Any]], None]


def _same_href(href: str) -> str:
    return href


def _navigate_now(perform, to: str, options: Dict[str, Any]) -> None:
    perform(to, options)


@dataclass(frozen=True)
class RouterConfig:
    hook: LocationHook = use_browser_location
    search_hook: SearchHook = use_browser_search
    parser: Parser = compile_pattern
    base: str = ""
    hrefs: HrefFormatter = _same_href
    around_nav: AroundNav = _navigate_now
    ssr_path: Optional[str] = None
    ssr_search: Optional[str] = None
    ssr_context: Optional[SsrContext] = None

    @property
    def is_static(self) -> bool:
        return self.ssr_path is not None


DEFAULT_ROUTER = RouterConfig()


def compose_router(
    parent: RouterConfig,
    *,
    location: Optional[LocationSource] = None,
    hook: Optional[LocationHook] = None,
    search_hook: Optional[SearchHook] = None,
    parser: Optional[Parser] = None,
    base: Optional[str] = None,
    hrefs: Optional[HrefFormatter] = None,
    around_nav: Optional[AroundNav] = None,
    ssr_path: Optional[str] = None,
    ssr_search: Optional[str] = None,
    ssr_context: Optional[SsrContext] = None,
) -> RouterConfig:
    """Configuration for a child router: unset options inherit from ``parent``.

    A new location (``location`` or ``hook``) starts from the defaults instead
    of the parent. ``base`` is appended to the parent's base. ``ssr_path`` may
    carry the search string after ``?``. Returns ``parent`` itself when nothing
    differs.
    """
    if location is not None:
        hook = hook or location.use_location
        search_hook = search_hook or location.use_search
        hrefs = hrefs or location.format_href
    if hook is not None:
        parent = DEFAULT_ROUTER
        # a plain hook function may carry its companions as attributes
        hrefs = hrefs or getattr(hook, "hrefs", None)
        search_hook = search_hook or getattr(hook, "search_hook", None)

    if ssr_path is not None:
        ssr_path, qm, search = ssr_path.partition("?")
        if qm:
            ssr_search = search
        elif ssr_search is None:
            ssr_search = ""

    overrides = {
        "hook": hook,
        "search_hook": search_hook,
        "parser": parser,
        "hrefs": hrefs,
        "around_nav": around_nav,
        "ssr_path": ssr_path,
        "ssr_search": ssr_search,
        "ssr_context": ssr_context,
    }
    changes = {k: v for k, v in overrides.items() if v is not None and v != getattr(parent, k)}
    if base:
        changes["base"] = parent.base + base

    return replace(parent, **changes) if changes else parent


