"""In-process model of a browser window's ``location`` and ``history``.

The host owns the session history (a stack of entries plus a cursor) and
dispatches the events a browser does: ``popstate`` and ``hashchange`` for
traversals and fragment changes, and ``pushState`` / ``replaceState`` for
script-initiated writes. Listeners run synchronously, in registration order.
"""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import urljoin, urlsplit

from pyroute.core.hook import HookContext

Listener = Callable[["HostEvent"], None]

POPSTATE = "popstate"
HASHCHANGE = "hashchange"
PUSHSTATE = "pushState"
REPLACESTATE = "replaceState"

HOST_SERVICE = "host_history"


@dataclass(frozen=True)
class HistoryEntry:
    url: str
    state: Any = None


@dataclass(frozen=True)
class HostEvent:
    type: str
    state: Any = None
    old_url: Optional[str] = None
    new_url: Optional[str] = None


def _split_fragment(url: str) -> str:
    return url.partition("#")[0]


class HostHistory:
    def __init__(self, url: str = "/", *, origin: str = "http://localhost") -> None:
        self.origin = origin.rstrip("/")
        self._entries: List[HistoryEntry] = [HistoryEntry(self._resolve(url, "/"))]
        self._index = 0
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    # -------------------------------
    # Location
    # -------------------------------
    @property
    def url(self) -> str:
        """Origin-relative URL of the current entry: path, ?query and #fragment."""
        return self._entries[self._index].url

    @property
    def href(self) -> str:
        return self.origin + self.url

    @property
    def pathname(self) -> str:
        return urlsplit(self.url).path or "/"

    @property
    def search(self) -> str:
        query = _split_fragment(self.url).partition("?")[2]
        return "?" + query if query else ""

    @property
    def hash(self) -> str:
        fragment = self.url.partition("#")[2]
        return "#" + fragment if fragment else ""

    @property
    def state(self) -> Any:
        return self._entries[self._index].state

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def _resolve(self, url: Optional[str], current: str) -> str:
        if url is None:
            return current
        absolute = urljoin(self.origin + current, url)
        if not absolute.startswith(self.origin):
            raise ValueError(f"cannot navigate to a different origin: {url!r}")
        return absolute[len(self.origin):] or "/"

    # -------------------------------
    # Events
    # -------------------------------
    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        try:
            self._listeners[event_type].remove(listener)
        except ValueError:
            pass

    def dispatch_event(self, event: HostEvent) -> None:
        for listener in list(self._listeners.get(event.type, ())):
            listener(event)

    # -------------------------------
    # Script-initiated writes
    # -------------------------------
    def push_state(self, state: Any = None, url: Optional[str] = None) -> None:
        entry = HistoryEntry(self._resolve(url, self.url), state)
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index += 1
        self.dispatch_event(HostEvent(PUSHSTATE, state))

    def replace_state(self, state: Any = None, url: Optional[str] = None) -> None:
        self._entries[self._index] = HistoryEntry(self._resolve(url, self.url), state)
        self.dispatch_event(HostEvent(REPLACESTATE, state))

    def set_hash(self, fragment: str) -> None:
        """Assign ``location.hash``: a new entry that differs only in its fragment."""
        fragment = fragment[1:] if fragment.startswith("#") else fragment
        old = self.href
        url = _split_fragment(self.url) + ("#" + fragment if fragment else "")
        if url == self.url:
            return
        del self._entries[self._index + 1 :]
        self._entries.append(HistoryEntry(url))
        self._index += 1
        self.dispatch_event(HostEvent(POPSTATE, None))
        self.dispatch_event(HostEvent(HASHCHANGE, None, old, self.href))

    # -------------------------------
    # Traversal (user-initiated back/forward)
    # -------------------------------
    def go(self, delta: int) -> None:
        target = max(0, min(len(self._entries) - 1, self._index + delta))
        if target == self._index:
            return
        self._traverse(target)

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def traverse_to(self, url: str, state: Any = None) -> None:
        """Apply a traversal reported by a real browser, which only tells us where it landed."""
        url = self._resolve(url, self.url)
        for target in (self._index - 1, self._index + 1):
            if 0 <= target < len(self._entries) and self._entries[target].url == url:
                self._traverse(target)
                return
        old = self.href
        self._entries[self._index] = HistoryEntry(url, state)
        self._dispatch_traversal(old)

    def _traverse(self, target: int) -> None:
        old = self.href
        self._index = target
        self._dispatch_traversal(old)

    def _dispatch_traversal(self, old_href: str) -> None:
        self.dispatch_event(HostEvent(POPSTATE, self.state))
        if _split_fragment(old_href) == _split_fragment(self.href) and old_href != self.href:
            self.dispatch_event(HostEvent(HASHCHANGE, None, old_href, self.href))

    def __repr__(self):
        return f"<HostHistory {self.url!r} {self._index + 1}/{len(self._entries)}>"


# -------------------------------
# Process-wide host
# -------------------------------
_DETACHED = object()


def get_host() -> Optional[HostHistory]:
    """The process-wide host history, created on first access; ``None`` when detached."""
    host = HookContext.get_service(HOST_SERVICE, HostHistory)
    return None if host is _DETACHED else host


def set_host(host: Optional[HostHistory]) -> None:
    HookContext.set_service(HOST_SERVICE, _DETACHED if host is None else host)


@contextmanager
def detached_host() -> Iterator[None]:
    """Run a block as if there were no live history (e.g. server-side rendering)."""
    previous = HookContext._services.get(HOST_SERVICE)
    HookContext.set_service(HOST_SERVICE, _DETACHED)
    try:
        yield
    finally:
        if previous is None:
            HookContext._services.pop(HOST_SERVICE, None)
        else:
            HookContext.set_service(HOST_SERVICE, previous)
