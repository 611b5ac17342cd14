from .web import run_web

__all__ = ["run_web"]
