from __future__ import annotations

from typing import Any, List, Optional

from .base import LocationSource
from .store import Location


class MemoryLocation(LocationSource):
    """A location kept entirely in memory, for tests and embedding.

    - ``search_path`` is appended to the initial query
    - ``static=True`` ignores every ``navigate`` call
    - ``record=True`` exposes the entry list as ``history``
    """

    def __init__(
        self,
        path: str = "/",
        *,
        search_path: str = "",
        static: bool = False,
        record: bool = False,
    ) -> None:
        initial = path
        if search_path:
            initial += ("&" if path.partition("?")[2] else "?") + search_path
        super().__init__(Location.parse(initial))

        self._initial = initial
        self._static = static
        self._entries: List[str] = [initial]
        self._states: List[Any] = [None]
        self._index = 0
        self.history: Optional[List[str]] = self._entries if record else None

    @property
    def state(self) -> Any:
        return self._states[self._index]

    def navigate(
        self, to: str, *, replace: bool = False, state: Any = None, **options: Any
    ) -> None:
        if self._static:
            return
        self._write(to, replace, state)

    def _write(self, to: str, replace: bool, state: Any) -> None:
        if replace:
            self._entries[self._index] = to
            self._states[self._index] = state
        else:
            del self._entries[self._index + 1 :]
            del self._states[self._index + 1 :]
            self._entries.append(to)
            self._states.append(state)
            self._index += 1
        self._store.commit(Location.parse(to))

    def go(self, delta: int) -> None:
        target = max(0, min(len(self._entries) - 1, self._index + delta))
        if target == self._index:
            return
        self._index = target
        self._store.commit(Location.parse(self._entries[target]))

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def reset(self) -> None:
        """Drop every entry and start over from the initial location."""
        del self._entries[:]
        del self._states[:]
        self._index = -1
        self._write(self._initial, False, None)

    def __repr__(self):
        return f"<MemoryLocation {self._entries[self._index]!r}>"
