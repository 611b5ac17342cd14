# hook.py ----------------------------------------------------
import asyncio
import inspect
import warnings
from typing import Any, Callable, Dict, Optional

from . import core
from .core import Text, VNode
from .debug import enter_render, exit_render, record_unmount
from .runtime import discard_pending, schedule_rerender

# async unmount cleanups that are still running
_cleanup_tasks: set = set()


class Ref:
    __slots__ = ("current",)

    def __init__(self, current=None):
        self.current = current


class _StoreSlot:
    __slots__ = ("subscribe", "get_snapshot", "value", "unsubscribe")

    def __init__(self):
        self.subscribe = None
        self.get_snapshot = None
        self.value = None
        self.unsubscribe = None


def _flatten(output):
    if isinstance(output, (list, tuple)):
        for item in output:
            yield from _flatten(item)
    else:
        yield output


def _as_vnode(node):
    if isinstance(node, VNode):
        return node
    if isinstance(node, bool) or node is None:
        return None
    if isinstance(node, (str, int, float)):
        return Text(value=str(node))
    return None


class HookContext:
    _services: Dict[str, Any] = {}

    @classmethod
    def get_service(cls, key, factory):
        service = cls._services.get(key)
        if service is None:
            service = factory()
            cls._services[key] = service
        return service

    @classmethod
    def set_service(cls, key, value) -> None:
        cls._services[key] = value

    @classmethod
    def reset_services(cls) -> None:
        cls._services.clear()

    def __init__(self, name, component_fn, *, props=None, key=None, parent=None):
        self.name = name
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key
        self.parent: Optional["HookContext"] = parent
        self.depth: int = 0 if parent is None else parent.depth + 1
        self.slot = None

        self.hooks: list = []
        self.effects: list = []
        self.children: list["HookContext"] = []
        self.provided: Dict[Any, Any] = {}
        self.hook_idx: int = 0
        self._effect_slots: set[int] = set()
        self._store_slots: set[int] = set()
        self._mounted: bool = True  # flips on unmount; late updates are ignored

    def __repr__(self):
        return f"<HookContext {self.name} depth={self.depth}>"

    def use_state(self, initial):
        idx = self.hook_idx
        if idx >= len(self.hooks):
            self.hooks.append(initial() if callable(initial) else initial)

        def set_state(val):
            if not self._mounted:
                return
            if callable(val):
                val = val(self.hooks[idx])

            if val != self.hooks[idx]:
                self.hooks[idx] = val
                schedule_rerender(self, reason=f"use_state[{idx}] set -> {val!r}")

        self.hook_idx += 1
        return self.hooks[idx], set_state

    def use_effect(self, effect_fn, deps):
        deps_key = None if deps is None else tuple(deps)  # [] → () (immutable object)
        idx = self.hook_idx

        if idx >= len(self.hooks):  # first mount
            self.hooks.append((None, deps_key))
            self.effects.append((effect_fn, deps_key, idx))
            self._effect_slots.add(idx)
        else:  # updates
            old_cleanup, old_deps = self.hooks[idx]
            if deps_key is None or old_deps != deps_key:
                self.effects.append((effect_fn, deps_key, idx))
                self.hooks[idx] = (old_cleanup, deps_key)

        self.hook_idx += 1

    def use_memo(self, factory, deps=None):
        deps_key = None if deps is None else tuple(deps)
        idx = self.hook_idx

        if idx >= len(self.hooks):  # first time
            self.hooks.append((factory(), deps_key))
        else:
            value, old_key = self.hooks[idx]
            if deps_key is None or old_key != deps_key:
                self.hooks[idx] = (factory(), deps_key)

        self.hook_idx += 1
        return self.hooks[idx][0]

    def use_ref(self, initial=None) -> Ref:
        idx = self.hook_idx
        if idx >= len(self.hooks):
            self.hooks.append(Ref(initial))
        self.hook_idx += 1
        return self.hooks[idx]

    def use_event(self, fn: Callable) -> Callable:
        """Return a callable with a stable identity that always runs the latest ``fn``."""
        ref = self.use_ref(fn)
        ref.current = fn

        def make_stable():
            def stable(*args, **kwargs):
                return ref.current(*args, **kwargs)

            return stable

        return self.use_memo(make_stable, [])

    def provide(self, ctx_like, value) -> None:
        self.provided[ctx_like] = value

    def use_context(self, ctx_like):
        # contexts are provided by ancestors; a provider re-renders its whole subtree
        node = self.parent
        while node is not None:
            if ctx_like in node.provided:
                return node.provided[ctx_like]
            node = node.parent
        return ctx_like.default

    def use_sync_external_store(self, subscribe, get_snapshot):
        """Read ``get_snapshot()`` and re-render when ``subscribe``'s callback sees it change.

        The subscription is made while rendering so that no change committed
        between render and effects can be missed.
        """
        idx = self.hook_idx
        if idx >= len(self.hooks):
            self.hooks.append(_StoreSlot())
            self._store_slots.add(idx)
        slot = self.hooks[idx]
        slot.get_snapshot = get_snapshot
        slot.value = get_snapshot()

        # bound methods compare equal when they wrap the same function and object
        if slot.subscribe != subscribe:
            if slot.unsubscribe is not None:
                slot.unsubscribe()
            slot.subscribe = subscribe
            slot.unsubscribe = subscribe(lambda: self._on_store_change(slot))

        self.hook_idx += 1
        return slot.value

    def _on_store_change(self, slot: _StoreSlot) -> None:
        if not self._mounted:
            return
        value = slot.get_snapshot()
        if value is slot.value or value == slot.value:
            return
        schedule_rerender(self, reason="external store changed")

    def _run_cleanup(self, cleanup) -> None:
        if not cleanup:
            return
        try:
            if inspect.iscoroutinefunction(cleanup):
                task = asyncio.get_running_loop().create_task(cleanup())
                _cleanup_tasks.add(task)
                task.add_done_callback(self._async_cleanup_done)
            else:
                cleanup()
        except Exception as exc:
            warnings.warn(
                f"[HookContext] cleanup of <{self.name}> raised {exc!r}",
                RuntimeWarning,
                stacklevel=2,
            )

    def _async_cleanup_done(self, task: asyncio.Task) -> None:
        _cleanup_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            warnings.warn(
                f"[HookContext] async cleanup of <{self.name}> raised {exc!r}",
                RuntimeWarning,
                stacklevel=2,
            )

    def unmount(self):
        record_unmount(self)
        for idx in sorted(self._effect_slots):
            if idx < len(self.hooks):
                self._run_cleanup(self.hooks[idx][0])

        for idx in self._store_slots:
            slot = self.hooks[idx]
            if slot.unsubscribe is not None:
                slot.unsubscribe()
                slot.unsubscribe = None

        for child in self.children:
            child.unmount()

        self.children.clear()
        self.hooks.clear()
        self.effects.clear()
        self.provided.clear()
        self._effect_slots.clear()
        self._store_slots.clear()
        self._mounted = False
        discard_pending(self)

    def _reconcile(self, output) -> None:
        old = {(c.slot, c.component_fn): c for c in self.children}
        kept: list["HookContext"] = []
        seen_keys: set = set()

        for position, node in enumerate(_flatten(output)):
            vnode = _as_vnode(node)
            if vnode is None:
                continue

            slot = ("idx", position)
            if vnode.key is not None:
                if vnode.key in seen_keys:
                    warnings.warn(
                        f"[HookContext] duplicate key {vnode.key!r} under <{self.name}>; "
                        "falling back to its position.",
                        RuntimeWarning,
                        stacklevel=3,
                    )
                else:
                    seen_keys.add(vnode.key)
                    slot = ("key", vnode.key)

            matched = old.pop((slot, vnode.component_fn), None)
            if matched is None:
                matched = HookContext(
                    vnode.component_fn.__name__,
                    vnode.component_fn,
                    props=vnode.props,
                    key=vnode.key,
                    parent=self,
                )
                matched.slot = slot
            else:
                matched.props = vnode.props
            kept.append(matched)

        # stale children go away before any kept or new child renders
        for orphan in old.values():
            orphan.unmount()

        self.children = kept
        for child in kept:
            child.render()

    def render(self):
        depth_token = enter_render(self)
        try:
            token = core._context_stack.set(self)
            try:
                discard_pending(self)
                self.hook_idx = 0
                self.effects = []
                output = self.component_fn(__internal=True, **self.props)
            finally:
                core._context_stack.reset(token)
            self._reconcile(output)
        finally:
            exit_render(depth_token)

    async def run_effects(self):
        effects, self.effects = self.effects, []
        for fx, deps, idx in effects:
            if not self._mounted:
                return
            cln, _ = self.hooks[idx]
            if cln:
                if inspect.iscoroutinefunction(cln):
                    await cln()
                else:
                    cln()
            res = fx()
            if asyncio.iscoroutine(res):
                res = await res
            self.hooks[idx] = ((res if callable(res) else None), deps)

        for ch in list(self.children):
            await ch.run_effects()


def create_root(component_fn, **props) -> HookContext:
    return HookContext(component_fn.__name__, component_fn, props=props)
