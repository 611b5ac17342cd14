from __future__ import annotations

import asyncio
import json
import warnings

from fastapi import FastAPI, WebSocket
from starlette.endpoints import WebSocketEndpoint
from starlette.routing import WebSocketRoute

from .bridge import HistoryBridge


def register_ws_routes(app: FastAPI, *, bridge: HistoryBridge, path: str = "/ws") -> None:
    """
    Register a WebSocket route that connects each browser tab to ``bridge``.
    - outgoing: every message the bridge publishes, starting with the latest HTML
    - incoming: JSON messages handed to ``bridge.handle_message``
    """

    class HistoryWS(WebSocketEndpoint):
        encoding = "text"

        async def on_connect(self, ws: WebSocket):
            await ws.accept()
            connected = asyncio.Event()
            self._forward_task = asyncio.create_task(self._forward(ws, connected))
            await connected.wait()

        async def on_receive(self, ws: WebSocket, data: str):
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                warnings.warn(
                    f"[HistoryWS] dropping malformed message {data[:80]!r}",
                    RuntimeWarning,
                    stacklevel=2,
                )
                return
            bridge.handle_message(msg)

        async def on_disconnect(self, ws: WebSocket, close_code: int):
            task = getattr(self, "_forward_task", None)
            if task is not None:
                task.cancel()

        async def _forward(self, ws: WebSocket, connected: asyncio.Event):
            async with bridge.connect() as client:
                connected.set()
                if bridge.latest_html:
                    await ws.send_text(json.dumps({"t": "html", "html": bridge.latest_html}))
                async for message in client:
                    await ws.send_text(message)

    app.router.routes.append(WebSocketRoute(path, HistoryWS))
