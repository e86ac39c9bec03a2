from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from goldmine.catalog import UpgradeCategory
from goldmine.requirement import Requirement
from goldmine.snapshot import UpgradeStatus

if TYPE_CHECKING:
    from goldmine.state import GameState


@dataclass
class ClickProfile:
    """Configures click behavior for strategies."""

    clicks_per_second: float = 0.0
    active_until: Requirement | None = None
    # Fractional click attempts carried over to the next call
    _credit: float = field(default=0.0, init=False, repr=False, compare=False)

    def get_clicks(self, state: GameState, duration: float) -> int:
        """Number of click attempts during *duration* seconds.

        Short ticks accumulate toward the next whole click, so the long-run
        attempt rate matches *clicks_per_second* at any tick resolution.
        """
        if self.active_until is not None and self.active_until.evaluate(state):
            self._credit = 0.0
            return 0
        self._credit += self.clicks_per_second * duration
        clicks = int(self._credit + 1e-9)
        self._credit -= clicks
        return clicks


class Strategy(ABC):
    """Base class for autoplay strategies."""

    click_profile: ClickProfile | None = None

    @abstractmethod
    def decide_purchases(
        self, state: GameState, affordable: list[UpgradeStatus]
    ) -> list[str]:
        """Return ordered list of upgrade IDs to buy."""
        ...

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    @abstractmethod
    def describe(self) -> str: ...


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable upgrade first."""

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        categories: set[UpgradeCategory] | None = None,
    ) -> None:
        self.click_profile = click_profile
        self.categories = categories

    def decide_purchases(
        self, state: GameState, affordable: list[UpgradeStatus]
    ) -> list[str]:
        candidates = [
            u for u in affordable
            if self.categories is None or u.category in self.categories
        ]
        return [u.id for u in sorted(candidates, key=lambda u: u.next_cost)]

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if self.categories:
            parts.append("[" + ", ".join(sorted(c.value for c in self.categories)) + "]")
        if self.click_profile and self.click_profile.clicks_per_second:
            parts.append(f"({self.click_profile.clicks_per_second} CPS)")
        return " ".join(parts)


class PriorityList(Strategy):
    """Follow a designer-specified purchase order."""

    def __init__(
        self,
        priorities: list[tuple[str, int]],
        fallback: Strategy | None = None,
        click_profile: ClickProfile | None = None,
    ) -> None:
        self.priorities = priorities  # (upgrade_id, target_count)
        self.fallback = fallback
        self.click_profile = click_profile

    def decide_purchases(
        self, state: GameState, affordable: list[UpgradeStatus]
    ) -> list[str]:
        affordable_ids = {u.id for u in affordable}

        for upgrade_id, target_count in self.priorities:
            if state.owned_count(upgrade_id) >= target_count:
                continue
            # Save for the next unmet priority instead of skipping past it
            if upgrade_id in affordable_ids:
                return [upgrade_id]
            return []

        if self.fallback:
            return self.fallback.decide_purchases(state, affordable)
        return []

    def describe(self) -> str:
        items = ", ".join(f"{uid}x{cnt}" for uid, cnt in self.priorities)
        return f"PriorityList([{items}])"


STRATEGY_CATEGORIES: dict[str, set[UpgradeCategory] | None] = {
    "greedy": None,
    "passive_only": {UpgradeCategory.PASSIVE},
    "click_only": {UpgradeCategory.CLICK},
}
