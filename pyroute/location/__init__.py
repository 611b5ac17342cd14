# pyroute/location/__init__.py
from .store import Location, LocationStore, normalize_search, strip_qm
from .base import LocationSource, NavigationOptions, Navigate
from .history import (
    HistoryEntry,
    HostEvent,
    HostHistory,
    detached_host,
    get_host,
    set_host,
)
from .browser import (
    BrowserLocation,
    browser_location,
    navigate,
    use_browser_location,
    use_browser_search,
    use_history_state,
)
from .hash import HashLocation
from .memory import MemoryLocation
from .static import SsrContext, StaticLocation

__all__ = [
    "Location",
    "LocationStore",
    "normalize_search",
    "strip_qm",
    "LocationSource",
    "NavigationOptions",
    "Navigate",
    "HistoryEntry",
    "HostEvent",
    "HostHistory",
    "detached_host",
    "get_host",
    "set_host",
    "BrowserLocation",
    "browser_location",
    "navigate",
    "use_browser_location",
    "use_browser_search",
    "use_history_state",
    "HashLocation",
    "MemoryLocation",
    "SsrContext",
    "StaticLocation",
]
