"""Runtime state shared across the application."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass
class State:
    """What is running and how the front end is currently behaving."""

    core: Any = None
    core_running: bool = False
    menu_active: bool = False
    verbose: bool = False
    core_path: str = ""
    game_path: str = ""
    db: Any = None
    ludos: bool = False
    fast_forward: bool = False

    def reset(self) -> None:
        """Put every field back to its initial value."""
        for f in dataclasses.fields(self):
            if f.default_factory is not dataclasses.MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                setattr(self, f.name, f.default)