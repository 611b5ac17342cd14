from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .bridge import HistoryBridge
from .render_loop import RenderLoop


@dataclass
class ServerState:
    bridge: HistoryBridge
    render_loop: Optional[RenderLoop] = None
