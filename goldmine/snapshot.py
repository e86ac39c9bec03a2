from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from goldmine.catalog import UpgradeCategory
from goldmine.state import Tab

if TYPE_CHECKING:
    from goldmine.achievement import AchievementDef
    from goldmine.state import GameState


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only view of one upgrade for rendering and strategies."""

    id: str
    display_name: str
    description: str
    category: UpgradeCategory
    owned_count: int
    next_cost: float
    affordable: bool
    effect_magnitude: float


@dataclass(frozen=True)
class AchievementStatus:
    """Read-only view of one achievement with its progress."""

    id: str
    display_name: str
    description: str
    unlocked: bool
    progress: float
    target: float


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a presentation layer needs to draw one frame."""

    currency: float
    lifetime_earned: float
    passive_rate: float
    click_power: float
    click_count: int
    time_elapsed: float
    upgrades: tuple[UpgradeStatus, ...]
    achievements: tuple[AchievementStatus, ...]
    unlocked_achievements: frozenset[str]
    selected_index: int
    active_tab: Tab
    show_help: bool = False

    def upgrades_in(self, category: UpgradeCategory) -> list[UpgradeStatus]:
        return [u for u in self.upgrades if u.category is category]

    def visible_upgrades(self) -> list[UpgradeStatus]:
        """Upgrades listed on the active tab (empty on the achievements tab)."""
        category = self.active_tab.category
        if category is None:
            return []
        return self.upgrades_in(category)

    def upgrade(self, upgrade_id: str) -> UpgradeStatus | None:
        for u in self.upgrades:
            if u.id == upgrade_id:
                return u
        return None


def build_snapshot(
    state: GameState,
    achievements: Iterable[AchievementDef],
    show_help: bool = False,
) -> GameSnapshot:
    upgrades = []
    for udef in state.catalog:
        cost = state.next_cost(udef.id)
        upgrades.append(
            UpgradeStatus(
                id=udef.id,
                display_name=udef.display_name,
                description=udef.description,
                category=udef.category,
                owned_count=state.owned_count(udef.id),
                next_cost=cost,
                affordable=state.currency >= cost,
                effect_magnitude=udef.effect_magnitude,
            )
        )

    statuses = tuple(
        AchievementStatus(
            id=a.id,
            display_name=a.display_name,
            description=a.description,
            unlocked=state.has_achievement(a.id),
            progress=a.progress(state),
            target=a.target,
        )
        for a in achievements
    )

    return GameSnapshot(
        currency=state.currency,
        lifetime_earned=state.lifetime_earned,
        passive_rate=state.passive_rate(),
        click_power=state.click_power(),
        click_count=state.click_count,
        time_elapsed=state.time_elapsed,
        upgrades=tuple(upgrades),
        achievements=statuses,
        unlocked_achievements=frozenset(state.unlocked_achievements),
        selected_index=state.selected_index,
        active_tab=state.active_tab,
        show_help=show_help,
    )
