from __future__ import annotations

from .console import ShotConsole, shot_console

__all__ = [
    "ShotConsole",
    "shot_console",
]
