from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .base import LocationSource
from .store import Location, normalize_search


@dataclass
class SsrContext:
    """Filled in while rendering without a live history."""

    redirect_to: Optional[str] = None


class StaticLocation(LocationSource):
    """A frozen location for server-side rendering.

    ``navigate`` never changes the location; it records the target in
    ``context.redirect_to`` for the caller to act on.
    """

    def __init__(
        self, path: str = "/", search: str = "", context: Optional[SsrContext] = None
    ) -> None:
        super().__init__(Location(path or "/", normalize_search(search)))
        self.context = context if context is not None else SsrContext()

    def navigate(
        self, to: str, *, replace: bool = False, state: Any = None, **options: Any
    ) -> None:
        self.context.redirect_to = to
