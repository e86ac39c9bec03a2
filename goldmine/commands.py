"""Discrete input commands forwarded by a presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from goldmine.state import Tab


class Direction(Enum):
    UP = -1
    DOWN = 1


@dataclass(frozen=True)
class Click:
    """Mine gold by hand."""


@dataclass(frozen=True)
class Purchase:
    """Buy an upgrade; the one under the cursor when *upgrade_id* is None."""

    upgrade_id: str | None = None


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class SwitchTab:
    tab: Tab


@dataclass(frozen=True)
class ToggleHelp:
    """Presentation-only; the engine ignores it."""


@dataclass(frozen=True)
class Quit:
    """Stops the outer loop; the engine ignores it."""


Command = Click | Purchase | Navigate | SwitchTab | ToggleHelp | Quit
