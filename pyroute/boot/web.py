import os

import dotenv

from pyroute.core.debug import enable_tracing


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def run_web(root, *, host=None, port=None, reload=False, **uvicorn_kwargs):
    """Serve ``root`` with uvicorn.

    ``PYROUTE_HOST`` / ``PYROUTE_PORT`` (read after loading ``.env``) fill in
    whatever is not passed explicitly; ``PYROUTE_TRACE=1`` turns on render
    tracing.
    """
    import uvicorn
    from pyroute.web.server import create_app

    dotenv.load_dotenv()
    host = host or os.getenv("PYROUTE_HOST", "127.0.0.1")
    port = int(port or os.getenv("PYROUTE_PORT", "8000"))
    if _env_flag("PYROUTE_TRACE"):
        enable_tracing()

    uvicorn.run(create_app(root), host=host, port=port, reload=reload, **uvicorn_kwargs)
