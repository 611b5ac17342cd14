# pyroute/web/html.py
from pyroute.core.core import Text, component


def t(value) -> "Text":
    """Text node; rendered escaped."""
    return Text(value=str(value))


@component
def Fragment(*, children=None):
    return children if children is not None else []


def _tag(name: str):
    @component
    def tag(*, children=None, **attrs):
        return children if children is not None else []

    tag.__name__ = name
    tag.__is_html_tag__ = True
    tag.__html_tag_name__ = name
    return tag


div = _tag("div")
span = _tag("span")
p = _tag("p")
a = _tag("a")
h1 = _tag("h1")
h2 = _tag("h2")
h3 = _tag("h3")
ul = _tag("ul")
li = _tag("li")
nav = _tag("nav")
main = _tag("main")
b = _tag("b")
