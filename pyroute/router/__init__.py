# pyroute/router/__init__.py
from .pattern import CompiledMatcher, cache_info, compile_pattern
from .match import CATCH_ALL, NO_MATCH, MatchResult, ParamMap, match_route, matches
from .scope import (
    Scope,
    absolute_path,
    merge_params,
    relative_path,
    unescape,
    use_cached_params,
)
from .config import DEFAULT_ROUTER, RouterConfig, compose_router
from .switch import Candidate, resolve_switch, route_like
from .router import (
    Router,
    RouterContext,
    use_href,
    use_location,
    use_location_from_router,
    use_navigate,
    use_router,
    use_search,
    use_search_params,
)
from .route import ParamsContext, Redirect, Route, Switch, use_params, use_route

__all__ = [
    "CompiledMatcher",
    "cache_info",
    "compile_pattern",
    "CATCH_ALL",
    "NO_MATCH",
    "MatchResult",
    "ParamMap",
    "match_route",
    "matches",
    "Scope",
    "absolute_path",
    "merge_params",
    "relative_path",
    "unescape",
    "use_cached_params",
    "DEFAULT_ROUTER",
    "RouterConfig",
    "compose_router",
    "Candidate",
    "resolve_switch",
    "route_like",
    "Router",
    "RouterContext",
    "use_href",
    "use_location",
    "use_location_from_router",
    "use_navigate",
    "use_router",
    "use_search",
    "use_search_params",
    "ParamsContext",
    "Redirect",
    "Route",
    "Switch",
    "use_params",
    "use_route",
]
