# pyroute/web/renderer.py
import html as _htmllib
from typing import Any, Dict, Iterable

from pyroute.core.hook import HookContext
from .html import Fragment

# python-friendly prop names -> attribute names
_RENAMED = {"class_": "class", "for_": "for"}
_DASHED_PREFIXES = ("data_", "aria_")


def _escape(value: Any) -> str:
    return _htmllib.escape("" if value is None else str(value), quote=True)


def _attr_name(prop: str) -> str:
    if prop in _RENAMED:
        return _RENAMED[prop]
    if prop.startswith(_DASHED_PREFIXES):
        return prop.replace("_", "-")
    return prop


def _attrs(props: Dict[str, Any]) -> str:
    """Tag props as an attribute string.

    ``True`` renders a valueless attribute; ``False`` and ``None`` are left out.
    """
    parts = []
    for prop, value in props.items():
        if prop == "children" or value is None or value is False:
            continue
        name = _attr_name(prop)
        parts.append(name if value is True else f'{name}="{_escape(value)}"')
    return "".join(" " + part for part in parts)


def _markup(nodes: Iterable[HookContext]) -> str:
    return "".join(_render_node(ctx) for ctx in nodes)


def _render_node(ctx: HookContext) -> str:
    fn = ctx.component_fn
    if getattr(fn, "__is_text_node__", False):
        return _escape(ctx.props.get("value", ""))
    if getattr(fn, "__is_html_tag__", False):
        tag = fn.__html_tag_name__
        return f"<{tag}{_attrs(ctx.props)}>{_markup(ctx.children)}</{tag}>"
    # Router, Route, providers: transparent
    return _markup(ctx.children)


def render_to_html(root_ctx: HookContext) -> str:
    """Render the children of ``root_ctx`` into an HTML string."""
    return _markup(root_ctx.children)


def render_to_string(node) -> str:
    """Render ``node`` once, without running effects, and tear it down again.

    Meant for server-side rendering under ``Router(ssr_path=...)``.
    """
    root = HookContext("ssr", Fragment, props={"children": node})
    try:
        root.render()
        return render_to_html(root)
    finally:
        root.unmount()
