from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

Unsubscribe = Callable[[], None]


def strip_qm(value: str) -> str:
    return value[1:] if value.startswith("?") else value


def normalize_search(value: str) -> str:
    """Search string without its leading ``?``; blank strings become empty."""
    value = strip_qm(value or "")
    return "" if not value.strip() else value


@dataclass(frozen=True)
class Location:
    path: str = "/"
    search: str = ""

    @classmethod
    def parse(cls, url: str) -> "Location":
        path, _, search = (url or "").partition("?")
        if not path.startswith("/"):
            path = "/" + path
        return cls(path, normalize_search(search))

    @property
    def url(self) -> str:
        return self.path + ("?" + self.search if self.search else "")


class LocationStore:
    """Current :class:`Location` snapshot with separate path and search observers.

    ``commit`` swaps the snapshot before notifying anyone, so every observer
    reads the same value during a notification cycle.
    """

    def __init__(self, location: Location) -> None:
        self._location = location
        self._path_subs: List[Callable[[], None]] = []
        self._search_subs: List[Callable[[], None]] = []

    @property
    def location(self) -> Location:
        return self._location

    def subscribe(self, cb: Callable[[], None]) -> Unsubscribe:
        return self._add(self._path_subs, cb)

    def subscribe_search(self, cb: Callable[[], None]) -> Unsubscribe:
        return self._add(self._search_subs, cb)

    @staticmethod
    def _add(subs: List[Callable[[], None]], cb: Callable[[], None]) -> Unsubscribe:
        subs.append(cb)

        def unsubscribe() -> None:
            try:
                subs.remove(cb)
            except ValueError:
                pass

        return unsubscribe

    def commit(self, location: Location) -> bool:
        """Swap in ``location``; returns whether anything changed.

        A commit of an identical location still tells the path observers, so
        every navigation is observable even when it lands where it started.
        """
        previous = self._location
        self._location = location

        if location == previous:
            for cb in list(self._path_subs):
                cb()
            return False

        if location.path != previous.path:
            for cb in list(self._path_subs):
                cb()
        if location.search != previous.search:
            for cb in list(self._search_subs):
                cb()
        return True
