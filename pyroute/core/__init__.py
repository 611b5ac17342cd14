# pyroute/core/__init__.py
from .hook import HookContext, Ref, create_root
from .provider import Context, create_context
from .runtime import schedule_rerender, run_renders, reset_runtime
from .core import VNode, Text
from .core import component, hooks

__all__ = [
    "HookContext",
    "Ref",
    "create_root",
    "Context",
    "create_context",
    "schedule_rerender",
    "run_renders",
    "reset_runtime",
    "VNode",
    "Text",
    "component",
    "hooks",
]
