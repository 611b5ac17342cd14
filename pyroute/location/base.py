from __future__ import annotations

from typing import Any, Callable, Optional, Tuple, TypedDict

from pyroute.core.core import hooks
from .store import Location, LocationStore, Unsubscribe

Navigate = Callable[..., None]


class NavigationOptions(TypedDict, total=False):
    replace: bool
    state: Any
    transition: bool


class LocationSource:
    """A subscribable current location plus a ``navigate`` operation.

    Observers registered with :meth:`subscribe` are told (without payload) that
    the path changed; :meth:`subscribe_search` observers that the search did.
    Both re-read :meth:`current_location`.
    """

    def __init__(self, location: Optional[Location] = None) -> None:
        self._store = LocationStore(location or Location())

    def current_location(self) -> Location:
        return self._store.location

    def subscribe(self, cb: Callable[[], None]) -> Unsubscribe:
        return self._store.subscribe(cb)

    def subscribe_search(self, cb: Callable[[], None]) -> Unsubscribe:
        return self._store.subscribe_search(cb)

    def navigate(
        self, to: str, *, replace: bool = False, state: Any = None, **options: Any
    ) -> None:
        raise NotImplementedError

    def format_href(self, href: str) -> str:
        return href

    def _current_path(self) -> str:
        return self.current_location().path

    def _current_search(self) -> str:
        return self.current_location().search

    # -------------------------------
    # Component bindings
    # -------------------------------
    def use_location(self, router=None) -> Tuple[str, Navigate]:
        path = hooks.use_sync_external_store(self.subscribe, self._current_path)
        return path, self.navigate

    def use_search(self, router=None) -> str:
        return hooks.use_sync_external_store(self.subscribe_search, self._current_search)
