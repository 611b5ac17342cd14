# core.py ----------------------------------------------------
from contextvars import ContextVar
from functools import wraps

_context_stack = ContextVar("component_context", default=None)


class _HookProxy:

    def __getattr__(self, name):
        # resolve against the component currently rendering (set in HookContext.render)
        comp = _context_stack.get()
        if comp is None:
            raise RuntimeError(
                f"hooks.{name}() can only be used while a component renders."
            )
        return getattr(comp, name)


hooks = _HookProxy()


class VNode:
    __slots__ = ("component_fn", "props", "key")

    def __init__(self, component_fn, props=None, key=None):
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key

    def __repr__(self):
        name = getattr(self.component_fn, "__name__", "?")
        key = f" key={self.key!r}" if self.key is not None else ""
        return f"<{name}{key}>"


def component(fn):
    @wraps(fn)
    def wrapper(*, key=None, __internal=False, **props):
        if __internal:
            return fn(**props)
        return VNode(wrapper, props=props, key=key)

    return wrapper


@component
def Text(*, value=""):
    return []


# renderers emit the value verbatim
Text.__is_text_node__ = True
