"""Render pass tracing.

Each pass of the render queue can be recorded as a trace: the component the
pass started from, the reasons it was scheduled (store changes, state
setters, context updates) and every render or unmount that happened inside
it. Nothing is recorded until :func:`enable_tracing` is called.

Does not import ``pyroute.core.hook``; any object with a ``name`` and an
optional ``key`` can be traced.
"""

import time
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

_active: ContextVar[Optional[Dict[str, Any]]] = ContextVar("pyroute_trace", default=None)
_depth: ContextVar[int] = ContextVar("pyroute_trace_depth", default=0)
_enabled = False

_traces: List[Dict[str, Any]] = []
MAX_TRACES = 50


def _label(ctx: Any) -> str:
    return getattr(ctx, "name", type(ctx).__name__)


def _event(kind: str, ctx: Any, depth: int) -> None:
    trace = _active.get()
    if trace is None:
        return
    trace["events"].append(
        {
            "t": time.time(),
            "kind": kind,
            "depth": depth,
            "name": _label(ctx),
            "key": getattr(ctx, "key", None),
        }
    )


def record_schedule(ctx: Any, reason: Optional[str] = None) -> None:
    """Remember why ``ctx`` was queued; picked up by the next trace."""
    if not _enabled or not reason:
        return
    pending = getattr(ctx, "_debug_reasons", None)
    if pending is None:
        pending = []
        setattr(ctx, "_debug_reasons", pending)
    pending.append(reason)


def take_reasons(ctx: Any) -> List[str]:
    pending = getattr(ctx, "_debug_reasons", None) or []
    if pending:
        setattr(ctx, "_debug_reasons", [])
    return pending


def start_trace(root_ctx: Any, reasons: Optional[List[str]] = None) -> None:
    if not _enabled:
        return
    now = time.time()
    _traces.append(
        {
            "id": f"pass-{int(now * 1000)}-{id(root_ctx):x}",
            "root_name": _label(root_ctx),
            "reasons": list(reasons or ()),
            "ts": now,
            "events": [],
        }
    )
    del _traces[:-MAX_TRACES]
    _active.set(_traces[-1])
    _depth.set(0)


def end_trace() -> None:
    _active.set(None)
    _depth.set(0)


def enter_render(ctx: Any) -> Any:
    if not _enabled:
        return None
    depth = _depth.get()
    _event("origin" if depth == 0 else "propagate", ctx, depth)
    return _depth.set(depth + 1)


def exit_render(token: Any) -> None:
    if token is not None:
        _depth.reset(token)


def record_unmount(ctx: Any) -> None:
    if _enabled:
        _event("unmount", ctx, _depth.get())


def last_trace() -> Optional[Dict[str, Any]]:
    return _traces[-1] if _traces else None


def format_trace(trace: Dict[str, Any]) -> str:
    lines = [f"root: {trace['root_name']}"]
    if trace["reasons"]:
        lines.append(f"reasons: {', '.join(trace['reasons'])}")
    for ev in trace["events"]:
        key = "" if ev["key"] is None else f" key={ev['key']!r}"
        lines.append(f"{'  ' * ev['depth']}- {ev['kind']}: {ev['name']}{key}")
    return "\n".join(lines)


def enable_tracing() -> None:
    global _enabled
    _enabled = True


def disable_tracing() -> None:
    global _enabled
    _enabled = False


def clear_traces() -> None:
    del _traces[:]
