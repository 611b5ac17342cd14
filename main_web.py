from pyroute.boot import run_web
from pyroute.core.core import component, hooks
from pyroute.router import Redirect, Route, Switch, use_href, use_params, use_search_params
from pyroute.web.html import a, h1, li, main, nav, p, ul

USERS = {"1": "Ada", "2": "Grace", "3": "Linus"}


@component
def Link(*, to, children=None):
    return a(href=use_href(to), children=children)


@component
def UserList():
    params, _ = use_search_params()
    wanted = params.get("q", "").lower()
    return ul(
        children=[
            li(key=uid, children=Link(to=f"/{uid}", children=name))
            for uid, name in USERS.items()
            if wanted in name.lower()
        ]
    )


@component
def UserPage():
    params = use_params()
    visits, set_visits = hooks.use_state(0)

    def count():
        set_visits(lambda n: n + 1)

    hooks.use_effect(count, [params["id"]])
    name = USERS.get(params["id"], "unknown")
    return [h1(children=name), p(children=f"opened {visits} time(s)"), Link(to="~/users", children="back")]


@component
def Root():
    return main(
        children=[
            nav(children=[Link(to="/", children="home"), " | ", Link(to="/users", children="users")]),
            Switch(
                children=[
                    Route(path="/", children=p(children="Welcome.")),
                    Route(path="/users", nest=True, children=Switch(children=[
                        Route(path="/", component=lambda params: UserList()),
                        Route(path="/:id", children=UserPage()),
                    ])),
                    Route(path="/people/*", children=Redirect(to="/users", replace=True)),
                    Route(children=p(children="Not found.")),
                ]
            ),
        ]
    )


if __name__ == "__main__":
    run_web(Root)
