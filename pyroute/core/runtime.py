# runtime.py -------------------------------------------------
import asyncio
from typing import Dict, List, Optional

from .debug import end_trace, record_schedule, start_trace, take_reasons

# Insertion-ordered so components at the same depth render in scheduling order
_pending: Dict[object, None] = {}

_render_idle: Optional[asyncio.Event] = None  # will be created on demand
_render_signal: Optional[asyncio.Event] = None  # set when a render is scheduled


def get_render_idle() -> asyncio.Event:
    global _render_idle
    if _render_idle is None:
        _render_idle = asyncio.Event()
        _render_idle.set()  # start in the 'idle' state
    return _render_idle


def get_render_signal() -> asyncio.Event:
    """Event that is set whenever a rerender is scheduled, and cleared after run_renders drains the queue."""
    global _render_signal
    if _render_signal is None:
        _render_signal = asyncio.Event()
    return _render_signal


def schedule_rerender(ctx, reason: str = None) -> None:
    record_schedule(ctx, reason)
    if ctx in _pending:
        return
    _pending[ctx] = None
    get_render_idle().clear()
    get_render_signal().set()


def discard_pending(ctx) -> None:
    """Drop ``ctx`` from the queue; called when it renders as part of an ancestor."""
    _pending.pop(ctx, None)


def _next_pending():
    # ancestors first: a parent render settles its subtree against the same snapshot
    ctx = min(_pending, key=lambda c: c.depth)
    del _pending[ctx]
    return ctx


async def run_renders() -> None:
    """Drain the queue in passes: render every scheduled component, then run effects.

    Orphans are unmounted (and their cleanups run) while rendering, so within a
    pass every teardown happens before any newly mounted component's effects.
    """
    while _pending:
        rendered: List = []
        while _pending:
            ctx = _next_pending()
            if not getattr(ctx, "_mounted", True):
                continue
            start_trace(ctx, take_reasons(ctx))
            try:
                ctx.render()
            finally:
                end_trace()
            rendered.append(ctx)

        for ctx in rendered:
            if ctx._mounted:
                await ctx.run_effects()

    get_render_idle().set()
    get_render_signal().clear()


def reset_runtime() -> None:
    """Forget queued renders and loop-bound events (used between tests and app runs)."""
    global _render_idle, _render_signal
    _pending.clear()
    _render_idle = None
    _render_signal = None
