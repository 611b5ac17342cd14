from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from pyroute.core.core import hooks
from pyroute.core.hook import HookContext
from pyroute.errors import HostUnavailableError
from .base import LocationSource, Navigate
from .history import (
    HASHCHANGE,
    POPSTATE,
    PUSHSTATE,
    REPLACESTATE,
    HostEvent,
    HostHistory,
    get_host,
)
from .store import Location, Unsubscribe, normalize_search

BROWSER_SERVICE = "browser_location"


class HostLocation(LocationSource):
    """Location source that re-derives its snapshot from a host history on every host event."""

    events: Tuple[str, ...] = ()

    def __init__(self, history: Optional[HostHistory] = None) -> None:
        super().__init__()
        self._history = history
        self._attached: Optional[HostHistory] = None

    def _host(self) -> HostHistory:
        host = self._history if self._history is not None else get_host()
        if host is None:
            raise HostUnavailableError(
                f"{type(self).__name__} needs a host history; "
                "pass ssr_path to the Router to render without one"
            )
        if host is not self._attached:
            self._attach(host)
        return host

    def _attach(self, host: HostHistory) -> None:
        if self._attached is not None:
            for event_type in self.events:
                self._attached.remove_event_listener(event_type, self._on_host_event)
        for event_type in self.events:
            host.add_event_listener(event_type, self._on_host_event)
        self._attached = host
        self._store.commit(self.read(host))

    def _on_host_event(self, event: HostEvent) -> None:
        self._store.commit(self.read(self._attached))

    def read(self, host: HostHistory) -> Location:
        raise NotImplementedError

    def current_location(self) -> Location:
        self._host()
        return super().current_location()

    def subscribe(self, cb: Callable[[], None]) -> Unsubscribe:
        self._host()
        return super().subscribe(cb)

    def subscribe_search(self, cb: Callable[[], None]) -> Unsubscribe:
        self._host()
        return super().subscribe_search(cb)

    def subscribe_host(self, cb: Callable[[], None]) -> Unsubscribe:
        """Observe every host event this source listens to (state changes included)."""
        host = self._host()

        def listener(_event: HostEvent) -> None:
            cb()

        for event_type in self.events:
            host.add_event_listener(event_type, listener)

        def unsubscribe() -> None:
            for event_type in self.events:
                host.remove_event_listener(event_type, listener)

        return unsubscribe

    def history_state(self) -> Any:
        return self._host().state


class BrowserLocation(HostLocation):
    """Mirrors the host's address bar: path from ``pathname``, search from ``search``."""

    events = (POPSTATE, PUSHSTATE, REPLACESTATE, HASHCHANGE)

    def read(self, host: HostHistory) -> Location:
        return Location(host.pathname, normalize_search(host.search))

    def navigate(
        self, to: str, *, replace: bool = False, state: Any = None, **options: Any
    ) -> None:
        host = self._host()
        if replace:
            host.replace_state(state, to)
        else:
            host.push_state(state, to)


def browser_location() -> BrowserLocation:
    """The process-wide browser location, created on first access."""
    return HookContext.get_service(BROWSER_SERVICE, BrowserLocation)


def use_browser_location(router=None) -> Tuple[str, Navigate]:
    return browser_location().use_location(router)


def use_browser_search(router=None) -> str:
    return browser_location().use_search(router)


def navigate(to: str, **options: Any) -> None:
    browser_location().navigate(to, **options)


def use_history_state() -> Any:
    source = browser_location()
    return hooks.use_sync_external_store(source.subscribe_host, source.history_state)
