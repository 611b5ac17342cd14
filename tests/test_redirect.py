"""Tests for Redirect."""

import warnings

import pytest

from pyroute.location import HostHistory, MemoryLocation
from pyroute.router import Redirect, Route, Router


class TestRedirect:
    @pytest.mark.asyncio
    async def test_renders_nothing_and_navigates(self, mount, host: HostHistory) -> None:
        tree = await mount(Redirect(to="/users"))
        assert tree.html == ""
        assert host.pathname == "/users"

    @pytest.mark.asyncio
    async def test_href_alias(self, mount, host: HostHistory) -> None:
        await mount(Redirect(href="/via-href"))
        assert host.pathname == "/via-href"

    @pytest.mark.asyncio
    async def test_relative_to_the_base(self, mount, host: HostHistory) -> None:
        await mount(Router(base="/app", children=Redirect(to="/nested")))
        assert host.pathname == "/app/nested"

    @pytest.mark.asyncio
    async def test_absolute_target(self, mount, host: HostHistory) -> None:
        await mount(Router(base="/app", children=Redirect(to="~/absolute")))
        assert host.pathname == "/absolute"

    @pytest.mark.asyncio
    async def test_replace(self, mount, host: HostHistory) -> None:
        await mount(Redirect(to="/users", replace=True))
        assert host.pathname == "/users"
        assert host.length == 1

    @pytest.mark.asyncio
    async def test_history_state(self, mount, host: HostHistory) -> None:
        await mount(Redirect(to="/users", state={"hello": "world"}))
        assert host.state == {"hello": "world"}

    @pytest.mark.asyncio
    async def test_navigate_return_value_is_not_a_cleanup(self, mount) -> None:
        targets = []

        def hook(router):
            def navigate(to, **options):
                targets.append(to)
                return "foo"

            return "/", navigate

        tree = await mount(Router(hook=hook, children=Redirect(to="/users", replace=True)))
        assert targets == ["/users"]

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            tree.unmount()

    @pytest.mark.asyncio
    async def test_redirects_once_per_mount(self, mount) -> None:
        memory = MemoryLocation("/old", record=True)
        tree = await mount(
            Router(
                location=memory,
                children=[
                    Route(path="/old", children=Redirect(to="/new")),
                    Route(path="/new", children="new page"),
                ],
            )
        )
        assert tree.html == "new page"
        assert memory.history == ["/old", "/new"]
