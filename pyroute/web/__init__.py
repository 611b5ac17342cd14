# pyroute/web/__init__.py
from .bridge import HistoryBridge
from .renderer import render_to_html, render_to_string
from .server import create_app

__all__ = ["HistoryBridge", "create_app", "render_to_html", "render_to_string"]
