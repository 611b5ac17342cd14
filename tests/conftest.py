"""Shared fixtures: a clean service registry and render queue for every test."""

import pytest

from pyroute.core.debug import clear_traces, disable_tracing
from pyroute.core.hook import HookContext
from pyroute.core.runtime import reset_runtime, run_renders
from pyroute.location.history import HostHistory, set_host
from pyroute.web.html import Fragment
from pyroute.web.renderer import render_to_html


@pytest.fixture(autouse=True)
def _fresh_runtime():
    HookContext.reset_services()
    reset_runtime()
    yield
    HookContext.reset_services()
    reset_runtime()
    disable_tracing()
    clear_traces()


@pytest.fixture
def host() -> HostHistory:
    """A process-wide host history starting at ``/``."""
    history = HostHistory("/")
    set_host(history)
    return history


class Mounted:
    """A tree mounted under a transparent root, plus helpers to drive it."""

    def __init__(self, node) -> None:
        self.root = HookContext("test-root", Fragment, props={"children": node})

    async def start(self) -> "Mounted":
        self.root.render()
        await self.root.run_effects()
        await run_renders()
        return self

    async def rerender(self, node=None) -> None:
        if node is not None:
            self.root.props = {"children": node}
        self.root.render()
        await self.root.run_effects()
        await run_renders()

    async def settle(self) -> None:
        await run_renders()

    @property
    def html(self) -> str:
        return render_to_html(self.root)

    def unmount(self) -> None:
        self.root.unmount()


@pytest.fixture
def mount():
    mounted = []

    async def _mount(node) -> Mounted:
        tree = await Mounted(node).start()
        mounted.append(tree)
        return tree

    yield _mount
    for tree in mounted:
        tree.unmount()
