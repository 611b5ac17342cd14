from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from pyroute.core.hook import create_root
from pyroute.core.runtime import reset_runtime
from pyroute.location.history import HostHistory, get_host, set_host
from pyroute.location.static import SsrContext
from pyroute.router.router import Router
from .bridge import HistoryBridge
from .render_loop import RenderLoop
from .renderer import render_to_string
from .state import ServerState
from .templates import render_page
from .ws_endpoint import register_ws_routes


def create_app(root=None, *, history: Optional[HostHistory] = None, title: str = "pyroute") -> FastAPI:
    """Create the FastAPI app serving ``root`` (a component function).

    Every GET returns the page pre-rendered for the requested URL; a
    ``Redirect`` hit while pre-rendering becomes an HTTP redirect. The page
    script connects to ``/ws``, where a :class:`HistoryBridge` mirrors the
    browser's history onto ``history`` (the process-wide host by default)
    and streams the live tree's HTML back.
    """
    history = history if history is not None else (get_host() or HostHistory())
    bridge = HistoryBridge(history)

    # ---------- lifespan (startup/shutdown) ----------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        set_host(history)
        # render events are created on demand, bound to this loop
        reset_runtime()

        render_loop = None
        render_task = None
        if root is not None:
            render_loop = RenderLoop(create_root(root), bridge.publish_html)
            render_task = asyncio.create_task(render_loop.run())

        app.state.server_state = ServerState(bridge=bridge, render_loop=render_loop)
        try:
            yield
        finally:
            if render_task is not None:
                render_task.cancel()
                with suppress(asyncio.CancelledError):
                    await render_task
                render_loop.root.unmount()
            bridge.close()

    app = FastAPI(lifespan=lifespan)
    register_ws_routes(app, bridge=bridge)

    @app.get("/favicon.ico")
    async def favicon():
        return Response(status_code=204, media_type="image/x-icon")

    @app.get("/{full_path:path}")
    async def index(request: Request):
        body = ""
        if root is not None:
            url = request.url.path + ("?" + request.url.query if request.url.query else "")
            ssr = SsrContext()
            body = render_to_string(Router(ssr_path=url, ssr_context=ssr, children=root()))
            if ssr.redirect_to is not None and ssr.redirect_to != url:
                return RedirectResponse(ssr.redirect_to, status_code=307)
        return HTMLResponse(render_page(body, title=title))

    return app
