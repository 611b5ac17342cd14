"""Tests for Router / Route and the routing hooks, driven through the hook runtime."""

import pytest

from pyroute.core.core import component, hooks
from pyroute.core.debug import enable_tracing, format_trace, last_trace
from pyroute.location import HashLocation, HostHistory, MemoryLocation, navigate, use_history_state
from pyroute.router import (
    Route,
    Router,
    use_href,
    use_location,
    use_navigate,
    use_params,
    use_router,
    use_search,
    use_search_params,
)


@component
def ShowParams(*, sink):
    sink.append(use_params())
    return None


@component
def ShowLocation(*, sink):
    path, navigate = use_location()
    sink.append((path, navigate))
    return path


@component
def ShowSearch(*, sink):
    search = use_search()
    sink.append(search)
    return search


@component
def ShowRouter(*, sink):
    sink.append(use_router())
    return None


class TestRouter:
    @pytest.mark.asyncio
    async def test_router_object_survives_rerenders(self, mount) -> None:
        sink = []
        tree = await mount(Router(base="/app", children=ShowRouter(sink=sink)))
        await tree.rerender(Router(base="/app", children=ShowRouter(sink=sink)))

        assert len(sink) == 2
        assert sink[0] is sink[1]
        assert sink[0].base == "/app"

    @pytest.mark.asyncio
    async def test_settings_change_produces_a_new_router(self, mount) -> None:
        sink = []
        tree = await mount(Router(base="/app", children=ShowRouter(sink=sink)))
        await tree.rerender(Router(base="", children=ShowRouter(sink=sink)))

        assert sink[-1] is not sink[0]
        assert sink[-1].base == ""

    @pytest.mark.asyncio
    async def test_siblings_share_one_router(self, mount) -> None:
        sink = []
        await mount([ShowRouter(sink=sink), ShowRouter(sink=sink), ShowRouter(sink=sink)])
        assert len({id(router) for router in sink}) == 1

    @pytest.mark.asyncio
    async def test_nested_bases_concatenate(self, mount) -> None:
        sink = []
        await mount(Router(base="/baz", children=Router(base="/foo", children=ShowRouter(sink=sink))))
        assert sink[-1].base == "/baz/foo"


class TestRoute:
    @pytest.mark.asyncio
    async def test_renders_only_while_matching(self, mount) -> None:
        memory = MemoryLocation("/")
        tree = await mount(Router(location=memory, children=Route(path="/about", children="about us")))
        assert tree.html == ""

        memory.navigate("/about")
        await tree.settle()
        assert tree.html == "about us"

        memory.navigate("/")
        await tree.settle()
        assert tree.html == ""

    @pytest.mark.asyncio
    async def test_always_renders_without_a_path(self, mount) -> None:
        tree = await mount(Router(location=MemoryLocation("/anything"), children=Route(children="always")))
        assert tree.html == "always"

    @pytest.mark.asyncio
    async def test_render_function_receives_params(self, mount) -> None:
        tree = await mount(
            Router(
                location=MemoryLocation("/users/alex"),
                children=Route(path="/users/:name", children=lambda params: f"hi {params['name']}"),
            )
        )
        assert tree.html == "hi alex"

    @pytest.mark.asyncio
    async def test_component_prop(self, mount) -> None:
        @component
        def Profile(*, params):
            return f"profile {params['id']}"

        tree = await mount(
            Router(location=MemoryLocation("/u/9"), children=Route(path="/u/:id", component=Profile))
        )
        assert tree.html == "profile 9"

    @pytest.mark.asyncio
    async def test_relative_to_the_router_base(self, mount) -> None:
        tree = await mount(
            Router(
                base="/app",
                location=MemoryLocation("/app/dashboard"),
                children=Route(path="/dashboard", children="dash"),
            )
        )
        assert tree.html == "dash"

    @pytest.mark.asyncio
    async def test_escaped_paths_are_matched_decoded(self, mount) -> None:
        tree = await mount(
            Router(
                location=MemoryLocation("/%D1%84%D0%BE"),
                children=Route(path="/:word", children=lambda params: params["word"]),
            )
        )
        assert tree.html == "фо"


class TestParams:
    @pytest.mark.asyncio
    async def test_empty_outside_of_a_route(self, mount) -> None:
        sink = []
        await mount(ShowParams(sink=sink))
        assert sink[-1] == {}

    @pytest.mark.asyncio
    async def test_route_without_path_exposes_the_wildcard(self, mount) -> None:
        sink = []
        await mount(
            Router(location=MemoryLocation("/app-2/goods/tees"), children=Route(children=ShowParams(sink=sink)))
        )
        assert sink[-1] == {"0": "app-2/goods/tees", "*": "app-2/goods/tees"}

    @pytest.mark.asyncio
    async def test_closest_route_wins_positions(self, mount) -> None:
        sink = []
        await mount(
            Router(
                location=MemoryLocation("/app/users/1/maria"),
                children=Route(
                    path="/app/:foo/*",
                    children=Route(path="/app/users/:id/:name", children=ShowParams(sink=sink)),
                ),
            )
        )
        params = sink[-1]
        assert params["0"] == "1"
        assert params["1"] == "maria"
        assert params["id"] == "1"
        assert params["name"] == "maria"
        assert params["foo"] == "users"

    @pytest.mark.asyncio
    async def test_identity_is_stable_across_rerenders(self, mount) -> None:
        sink = []

        def tree_node():
            return Router(
                location=memory,
                children=Route(path="/:a/:b/*?", children=ShowParams(sink=sink)),
            )

        memory = MemoryLocation("/foo/bar")
        tree = await mount(tree_node())
        await tree.rerender(tree_node())

        assert len(sink) == 2
        assert sink[0] is sink[1]

    @pytest.mark.asyncio
    async def test_params_follow_navigation(self, mount) -> None:
        sink = []
        memory = MemoryLocation("/")
        tree = await mount(Router(location=memory, children=Route(path="/:id", children=ShowParams(sink=sink))))

        memory.navigate("/123")
        await tree.settle()
        assert sink[-1]["id"] == "123"


class TestNestedRoutes:
    @pytest.mark.asyncio
    async def test_nest_matches_loosely(self, mount) -> None:
        memory = MemoryLocation("/")
        tree = await mount(
            Router(location=memory, children=Route(path="/posts/:slug", nest=True, children="matched!"))
        )
        assert tree.html == ""

        for path, expected in [
            ("/posts/all", "matched!"),
            ("/users", ""),
            ("/posts/10-tricks/table-of-contents", "matched!"),
        ]:
            memory.navigate(path)
            await tree.settle()
            assert tree.html == expected

    @pytest.mark.asyncio
    async def test_base_becomes_the_matched_segment(self, mount) -> None:
        sink = []
        await mount(
            Router(
                location=MemoryLocation("/2012/04/posts", static=True),
                children=Route(
                    path="/:year/:month",
                    nest=True,
                    children=Route(path="/posts", children=ShowRouter(sink=sink)),
                ),
            )
        )
        assert sink[-1].base == "/2012/04"

    @pytest.mark.asyncio
    async def test_nesting_inside_nesting(self, mount) -> None:
        tree = await mount(
            Router(
                base="/app",
                location=MemoryLocation("/app/users/alexey/settings/all", static=True),
                children=Route(
                    path="/users/:name",
                    nest=True,
                    children=[
                        Route(path="/settings", children="should not be rendered"),
                        Route(path="/settings", nest=True, children=Route(path="/all", children="All settings")),
                    ],
                ),
            )
        )
        assert tree.html == "All settings"

    @pytest.mark.asyncio
    async def test_one_optional_segment(self, mount) -> None:
        memory = MemoryLocation("/")
        tree = await mount(
            Router(
                location=memory,
                children=Route(path="/:version?", nest=True, children=lambda p: p["version"] or "default"),
            )
        )
        assert tree.html == "default"

        memory.navigate("/v1")
        await tree.settle()
        assert tree.html == "v1"

        memory.navigate("/v2/dashboard")
        await tree.settle()
        assert tree.html == "v2"


class TestLocationHooks:
    @pytest.mark.asyncio
    async def test_location_relative_to_base(self, mount) -> None:
        sink = []
        memory = MemoryLocation("/app/users")
        tree = await mount(Router(base="/app", location=memory, children=ShowLocation(sink=sink)))
        path, navigate = sink[-1]
        assert path == "/users"

        navigate("/settings")
        await tree.settle()
        assert memory.current_location().path == "/app/settings"
        assert sink[-1][0] == "/settings"

        navigate("~/outside")
        await tree.settle()
        assert memory.current_location().path == "/outside"
        assert sink[-1][0] == "~/outside"

    @pytest.mark.asyncio
    async def test_navigate_is_stable(self, mount) -> None:
        sink = []

        @component
        def Grab():
            sink.append(use_navigate())
            return None

        memory = MemoryLocation("/")
        tree = await mount(Router(location=memory, children=Grab()))
        await tree.rerender(Router(location=memory, children=Grab()))
        assert sink[0] is sink[1]

    @pytest.mark.asyncio
    async def test_navigation_options_reach_the_source(self, mount) -> None:
        sink = []
        memory = MemoryLocation("/", record=True)
        tree = await mount(Router(location=memory, children=ShowLocation(sink=sink)))

        sink[-1][1]("/a", replace=True, state={"k": 1})
        await tree.settle()
        assert memory.history == ["/a"]
        assert memory.state == {"k": 1}

    @pytest.mark.asyncio
    async def test_default_router_follows_the_host(self, mount, host: HostHistory) -> None:
        sink = []
        tree = await mount(ShowLocation(sink=sink))

        host.push_state(None, "/from-host")
        await tree.settle()
        assert tree.html == "/from-host"

        host.back()
        await tree.settle()
        assert tree.html == "/"

    @pytest.mark.asyncio
    async def test_history_state_follows_the_current_entry(self, mount, host: HostHistory) -> None:
        @component
        def ShowState():
            state = use_history_state()
            return state["hello"] if state else "no state"

        tree = await mount(ShowState())
        assert tree.html == "no state"

        navigate("/path", state={"hello": "world"})
        await tree.settle()
        assert tree.html == "world"

        navigate("/path", replace=True, state={"hello": "again"})
        await tree.settle()
        assert tree.html == "again"

        host.back()
        await tree.settle()
        assert tree.html == "no state"
        assert host.pathname == "/"

    @pytest.mark.asyncio
    async def test_href_formatting(self, mount) -> None:
        sink = []

        @component
        def Link(*, to):
            sink.append(use_href(to))
            return None

        await mount(
            Router(
                base="/app",
                location=HashLocation(HostHistory("/")),
                children=[Link(to="/users"), Link(to="~/root")],
            )
        )
        assert sink == ["#/app/users", "#/root"]


class TestAroundNav:
    @pytest.mark.asyncio
    async def test_receives_target_and_options(self, mount) -> None:
        calls = []

        def around_nav(perform, to, options):
            calls.append((to, dict(options)))
            perform(to, options)

        sink = []
        memory = MemoryLocation("/")
        tree = await mount(Router(location=memory, around_nav=around_nav, children=ShowLocation(sink=sink)))

        sink[-1][1]("/about", transition=True)
        await tree.settle()

        assert calls == [("/about", {"transition": True})]
        assert tree.html == "/about"

    @pytest.mark.asyncio
    async def test_navigation_skipped_when_perform_is_not_called(self, mount) -> None:
        sink = []
        memory = MemoryLocation("/")
        tree = await mount(
            Router(location=memory, around_nav=lambda perform, to, options: None, children=ShowLocation(sink=sink))
        )

        sink[-1][1]("/about")
        await tree.settle()
        assert memory.current_location().path == "/"
        assert tree.html == "/"

    @pytest.mark.asyncio
    async def test_errors_propagate_and_leave_the_location(self, mount) -> None:
        def around_nav(perform, to, options):
            raise RuntimeError("blocked")

        sink = []
        memory = MemoryLocation("/")
        await mount(Router(location=memory, around_nav=around_nav, children=ShowLocation(sink=sink)))

        with pytest.raises(RuntimeError, match="blocked"):
            sink[-1][1]("/about")
        assert memory.current_location().path == "/"


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_from_memory_location(self, mount) -> None:
        sink = []
        await mount(
            Router(location=MemoryLocation("/", search_path="sort=created_at"), children=ShowSearch(sink=sink))
        )
        assert sink[-1] == "sort=created_at"

    @pytest.mark.asyncio
    async def test_search_is_unescaped(self, mount) -> None:
        sink = []
        await mount(Router(location=MemoryLocation("/?q=not%20found"), children=ShowSearch(sink=sink)))
        assert sink[-1] == "q=not found"

    @pytest.mark.asyncio
    async def test_custom_search_hook(self, mount, host: HostHistory) -> None:
        sink = []
        await mount(Router(search_hook=lambda router: "?custom", children=ShowSearch(sink=sink)))
        assert sink[-1] == "custom"

    @pytest.mark.asyncio
    async def test_path_and_search_observers_are_isolated(self, mount) -> None:
        paths, searches = [], []
        memory = MemoryLocation("/")
        tree = await mount(
            Router(location=memory, children=[ShowLocation(sink=paths), ShowSearch(sink=searches)])
        )

        memory.navigate("/?q=1")
        await tree.settle()
        assert len(paths) == 1
        assert searches == ["", "q=1"]

        memory.navigate("/next?q=1")
        await tree.settle()
        assert [p for p, _ in paths] == ["/", "/next"]
        assert searches == ["", "q=1"]


class TestSearchParams:
    @pytest.mark.asyncio
    async def test_read_and_update(self, mount, host: HostHistory) -> None:
        host.replace_state(None, "/users?active=true")
        sink = []

        @component
        def Filters():
            sink.append(use_search_params())
            return None

        tree = await mount(Filters())
        params, set_params = sink[-1]
        assert params == {"active": "true"}

        set_params(lambda prev: {**prev, "active": "false"})
        await tree.settle()
        assert sink[-1][0] == {"active": "false"}
        assert host.url == "/users?active=false"

    @pytest.mark.asyncio
    async def test_encoded_separators_stay_inside_values(self, mount, host: HostHistory) -> None:
        host.replace_state(None, "/?search=foo%26parameter_injection%3Dbar")
        sink = []

        @component
        def Filters():
            sink.append(use_search_params()[0])
            return None

        await mount(Filters())
        assert sink[-1] == {"search": "foo&parameter_injection=bar"}

    @pytest.mark.asyncio
    async def test_custom_search_hook_keys(self, mount, host: HostHistory) -> None:
        sink = []

        @component
        def Filters():
            sink.append(use_search_params()[0])
            return None

        await mount(Router(search_hook=lambda router: "none", children=Filters()))
        assert list(sink[-1]) == ["none"]


class TestTracing:
    @pytest.mark.asyncio
    async def test_store_changes_are_recorded_as_render_reasons(self, mount) -> None:
        enable_tracing()
        memory = MemoryLocation("/")
        tree = await mount(Router(location=memory, children=ShowLocation(sink=[])))

        memory.navigate("/traced")
        await tree.settle()

        trace = last_trace()
        assert trace is not None
        assert "external store changed" in trace["reasons"]
        assert trace["root_name"] == "ShowLocation"
        assert format_trace(trace).startswith("root: ShowLocation\nreasons: external store changed")
