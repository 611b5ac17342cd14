# provider.py ----------------------------------------------------
from pyroute.core.core import component, hooks


class Context:
    """A value handed down the component tree by the nearest ``Provider`` ancestor.

    ``Ctx(value=..., children=[...])`` builds the provider node;
    ``hooks.use_context(Ctx)`` reads the closest provided value, or ``default``.
    """

    def __init__(self, default, name: str, prop: str):
        self.default = default
        self.name = name
        self.prop = prop

        ctx = self

        @component
        def Provider(*, children=None, **props):
            try:
                value = props.pop(prop)
            except KeyError:
                raise TypeError(f"{ctx.name}.Provider missing required prop '{prop}'")
            hooks.provide(ctx, value)
            return children if children is not None else []

        Provider.__name__ = f"{name}Provider"
        self.Provider = Provider

    def __call__(self, **props):
        return self.Provider(**props)

    def __repr__(self):
        return f"<Context {self.name!r} default={self.default!r}>"


def create_context(*, default=None, name="Context", prop="value") -> Context:
    return Context(default, name, prop)
