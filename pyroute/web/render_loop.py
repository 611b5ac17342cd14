from __future__ import annotations

from typing import Callable, Optional

from pyroute.core.hook import HookContext
from pyroute.core.runtime import get_render_signal, run_renders
from .renderer import render_to_html


class RenderLoop:
    """Event-driven render loop: mounts the root, then waits on the render
    signal and publishes the HTML whenever it changed."""

    def __init__(self, root_ctx: HookContext, publish_html: Callable[[str], None]) -> None:
        self._root = root_ctx
        self._publish_html = publish_html
        self._prev_html: Optional[str] = None

    @property
    def root(self) -> HookContext:
        return self._root

    @property
    def html(self) -> str:
        return self._prev_html or ""

    async def mount(self) -> None:
        self._root.render()
        await self._root.run_effects()
        await self.flush()

    async def flush(self) -> None:
        await run_renders()
        html_now = render_to_html(self._root)
        if html_now != self._prev_html:
            self._prev_html = html_now
            self._publish_html(html_now)

    async def run(self) -> None:
        await self.mount()
        signal = get_render_signal()
        while True:
            await signal.wait()
            await self.flush()
