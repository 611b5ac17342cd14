from __future__ import annotations

import html as _htmllib

APP_MARKER = "<!--app-->"

BASE_HTML = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>__TITLE__</title>
  </head>
  <body>
    <div id="app"><!--app--></div>
    <script>
      (function () {
        const scheme = location.protocol === "https:" ? "wss://" : "ws://";
        const ws = new WebSocket(scheme + location.host + "/ws");
        const here = () => location.pathname + location.search + location.hash;
        const send = (msg) => ws.send(JSON.stringify(msg));

        ws.onopen = () => send({ t: "hello", url: here(), state: history.state });

        ws.onmessage = (ev) => {
          const msg = JSON.parse(ev.data);
          if (msg.t === "html") {
            document.getElementById("app").innerHTML = msg.html;
          } else if (msg.t === "nav" && msg.url !== here()) {
            if (msg.op === "replace") history.replaceState(msg.state, "", msg.url);
            else history.pushState(msg.state, "", msg.url);
          }
        };

        window.addEventListener("popstate", (ev) =>
          send({ t: "popstate", url: here(), state: ev.state })
        );

        document.addEventListener("click", (ev) => {
          const link = ev.target.closest && ev.target.closest("a[href]");
          if (!link || link.origin !== location.origin || link.target) return;
          if (ev.metaKey || ev.ctrlKey || ev.shiftKey || ev.altKey) return;
          // fragment-only links are left to the browser; popstate reports them
          if (link.pathname === location.pathname && link.search === location.search && link.hash) return;
          ev.preventDefault();
          send({ t: "navigate", url: link.pathname + link.search + link.hash });
        });
      })();
    </script>
  </body>
</html>
"""


def render_page(body: str = "", *, title: str = "pyroute") -> str:
    page = BASE_HTML.replace("__TITLE__", _htmllib.escape(title))
    return page.replace(APP_MARKER, body, 1)
