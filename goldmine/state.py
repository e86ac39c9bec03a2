from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from goldmine.catalog import UpgradeCategory

if TYPE_CHECKING:
    from goldmine.catalog import Catalog


class Tab(Enum):
    PASSIVE = "passive"
    CLICK = "click"
    ACHIEVEMENTS = "achievements"

    @property
    def category(self) -> UpgradeCategory | None:
        """Upgrade category listed on this tab, if any."""
        if self is Tab.PASSIVE:
            return UpgradeCategory.PASSIVE
        if self is Tab.CLICK:
            return UpgradeCategory.CLICK
        return None


@dataclass
class UpgradeState:
    """Mutable runtime state for an upgrade."""

    owned_count: int = 0


class GameState:
    """Mutable runtime container holding all game state."""

    def __init__(self, catalog: Catalog, base_click_value: float = 1.0) -> None:
        self.catalog = catalog
        self.base_click_value = base_click_value

        self.time_elapsed: float = 0.0
        self.currency: float = 0.0
        self.lifetime_earned: float = 0.0
        self.click_count: int = 0
        self.last_click_time: float | None = None
        self.upgrades: dict[str, UpgradeState] = {
            udef.id: UpgradeState() for udef in catalog
        }
        # achievement id -> game time of unlock
        self.unlocked_achievements: dict[str, float] = {}

        self.selected_index: int = 0
        self.active_tab: Tab = Tab.PASSIVE

    def owned_count(self, upgrade_id: str) -> int:
        us = self.upgrades.get(upgrade_id)
        return us.owned_count if us else 0

    def total_owned(self) -> int:
        return sum(us.owned_count for us in self.upgrades.values())

    def has_achievement(self, id: str) -> bool:
        return id in self.unlocked_achievements

    def passive_rate(self) -> float:
        """Gold per second from owned Passive upgrades."""
        return self._production(UpgradeCategory.PASSIVE)

    def click_power(self) -> float:
        """Gold per accepted click: base value plus owned Click upgrades."""
        return self.base_click_value + self._production(UpgradeCategory.CLICK)

    def next_cost(self, upgrade_id: str) -> float:
        udef = self.catalog.require(upgrade_id)
        return udef.cost_at(self.owned_count(upgrade_id))

    def can_afford(self, upgrade_id: str) -> bool:
        return self.currency >= self.next_cost(upgrade_id)

    def metric(self, name: str) -> float:
        """Look up a tracked quantity by name."""
        getter = _METRICS.get(name)
        if getter is None:
            raise ValueError(f"Unknown metric: {name!r}. Expected one of {list(_METRICS)}")
        return getter(self)

    def _production(self, category: UpgradeCategory) -> float:
        return sum(
            self.owned_count(udef.id) * udef.effect_magnitude
            for udef in self.catalog.by_category(category)
        )


_METRICS = {
    "currency": lambda s: s.currency,
    "lifetime_earned": lambda s: s.lifetime_earned,
    "passive_rate": GameState.passive_rate,
    "click_power": GameState.click_power,
    "click_count": lambda s: float(s.click_count),
    "total_owned": lambda s: float(s.total_owned()),
    "time_elapsed": lambda s: s.time_elapsed,
}

METRIC_NAMES = tuple(_METRICS)
