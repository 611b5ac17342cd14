from __future__ import annotations

import asyncio
import json
import warnings
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Set

from pyroute.location.history import (
    POPSTATE,
    PUSHSTATE,
    REPLACESTATE,
    HostEvent,
    HostHistory,
)


class _Client:
    def __init__(self, queue: asyncio.Queue[str]):
        self._queue = queue

    def __aiter__(self) -> "_Client":
        return self

    async def __anext__(self) -> str:
        return await self._queue.get()


class HistoryBridge:
    """Keeps connected browsers and a :class:`HostHistory` in step.

    Local writes (``push_state`` / ``replace_state``, or traversals made on
    the server) are sent to every client as
    ``{"t": "nav", "op": "push"|"replace", "url", "state"}``. Client messages:

    - ``{"t": "hello", "url"}``: the page the browser opened on
    - ``{"t": "popstate", "url", "state"}``: the user went back/forward
    - ``{"t": "navigate", "url", "replace"?}``: a link was followed

    ``hello`` and ``popstate`` only report where the browser already is, so
    the host events they cause are not echoed back.
    """

    def __init__(self, history: HostHistory, *, max_queue: int = 1024) -> None:
        self.history = history
        self._max_queue = max_queue
        self._clients: Set[asyncio.Queue[str]] = set()
        self._applying = False
        self.latest_html: str = ""

        history.add_event_listener(PUSHSTATE, self._on_host_event)
        history.add_event_listener(REPLACESTATE, self._on_host_event)
        history.add_event_listener(POPSTATE, self._on_host_event)

    def close(self) -> None:
        self.history.remove_event_listener(PUSHSTATE, self._on_host_event)
        self.history.remove_event_listener(REPLACESTATE, self._on_host_event)
        self.history.remove_event_listener(POPSTATE, self._on_host_event)

    @property
    def client_count(self) -> int:
        return len(self._clients)

    # -------------------------------
    # Server -> clients
    # -------------------------------
    def _on_host_event(self, event: HostEvent) -> None:
        if self._applying:
            return
        op = "push" if event.type == PUSHSTATE else "replace"
        self.publish({"t": "nav", "op": op, "url": self.history.url, "state": event.state})

    def publish_html(self, html: str) -> None:
        self.latest_html = html
        self.publish({"t": "html", "html": html})

    def publish(self, message: dict) -> None:
        payload = json.dumps(message, default=str)
        for queue in list(self._clients):
            try:
                queue.put_nowait(payload)
            except asyncio.QueueFull:
                warnings.warn(
                    f"[HistoryBridge] client queue full; dropped {message.get('t')!r} message",
                    RuntimeWarning,
                    stacklevel=2,
                )

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[_Client]:
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=self._max_queue)
        self._clients.add(queue)
        try:
            yield _Client(queue)
        finally:
            self._clients.discard(queue)

    # -------------------------------
    # Clients -> server
    # -------------------------------
    def handle_message(self, msg: Any) -> None:
        t = msg.get("t") if isinstance(msg, dict) else None
        url = msg.get("url") if isinstance(msg, dict) else None

        if t in ("hello", "popstate") and isinstance(url, str):
            self._applying = True
            try:
                if t == "hello":
                    if url != self.history.url:
                        self.history.replace_state(msg.get("state"), url)
                else:
                    self.history.traverse_to(url, msg.get("state"))
            finally:
                self._applying = False
            return

        if t == "navigate" and isinstance(url, str):
            if msg.get("replace"):
                self.history.replace_state(msg.get("state"), url)
            else:
                self.history.push_state(msg.get("state"), url)
            return

        warnings.warn(
            f"[HistoryBridge] ignoring unknown client message {msg!r}",
            RuntimeWarning,
            stacklevel=2,
        )
