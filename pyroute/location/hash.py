from __future__ import annotations

import re
from typing import Any

from .browser import HostLocation
from .history import HASHCHANGE, HostEvent, HostHistory
from .store import Location, normalize_search

_LEADING = re.compile(r"^#?/?")
# navigation targets drop every leading slash before "#/" is prepended
_TARGET_LEADING = re.compile(r"^#?/*")


class HashLocation(HostLocation):
    """Routes on the fragment: ``/app#/users/1`` is the location ``/users/1``.

    Only ``hashchange`` is observed; navigation writes the entry through
    ``push_state``/``replace_state`` (which never fire ``hashchange``) and then
    dispatches a single ``hashchange`` itself.
    """

    events = (HASHCHANGE,)

    def read(self, host: HostHistory) -> Location:
        return Location("/" + _LEADING.sub("", host.hash, count=1), normalize_search(host.search))

    def navigate(
        self, to: str, *, replace: bool = False, state: Any = None, **options: Any
    ) -> None:
        host = self._host()
        fragment, _, search = _TARGET_LEADING.sub("", to, count=1).partition("?")
        old_href = host.href
        url = host.pathname + ("?" + search if search else host.search) + "#/" + fragment

        if replace:
            host.replace_state(state, url)
        else:
            host.push_state(state, url)
        host.dispatch_event(HostEvent(HASHCHANGE, None, old_href, host.href))

    def format_href(self, href: str) -> str:
        return "#" + href
