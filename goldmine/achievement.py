from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from goldmine.requirement import Req, Requirement

if TYPE_CHECKING:
    from goldmine.state import GameState


@dataclass
class AchievementDef:
    """A one-time unlock that fires once a tracked metric reaches its target.

    Every tracked metric is monotonically non-decreasing, so once the
    trigger holds it holds forever and re-evaluation is idempotent.
    """

    id: str
    display_name: str = ""
    description: str = ""
    metric: str = "lifetime_earned"
    target: float = 0.0
    trigger: Requirement = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id
        self.trigger = Req.metric(self.metric, ">=", self.target)

    def is_met(self, state: GameState) -> bool:
        return self.trigger.evaluate(state)

    def progress(self, state: GameState) -> float:
        """Current value of the tracked metric."""
        return state.metric(self.metric)


ACHIEVEMENTS: tuple[AchievementDef, ...] = (
    AchievementDef("first_steps", "First Steps", "Earn 100 total gold",
                   "lifetime_earned", 100.0),
    AchievementDef("getting_rich", "Getting Rich", "Earn 10,000 total gold",
                   "lifetime_earned", 10_000.0),
    AchievementDef("millionaire", "Millionaire", "Earn 1,000,000 total gold",
                   "lifetime_earned", 1_000_000.0),
    AchievementDef("passive_income", "Passive Income", "Reach 10 gold per second",
                   "passive_rate", 10.0),
    AchievementDef("gold_rush", "Gold Rush", "Reach 100 gold per second",
                   "passive_rate", 100.0),
    AchievementDef("click_master", "Click Master", "Click 1,000 times",
                   "click_count", 1_000),
    AchievementDef("power_clicker", "Power Clicker", "Reach 50 gold per click",
                   "click_power", 50.0),
    AchievementDef("upgrade_collector", "Upgrade Collector", "Purchase 50 upgrades",
                   "total_owned", 50),
)


def evaluate_achievements(
    state: GameState,
    achievements: Iterable[AchievementDef] = ACHIEVEMENTS,
) -> set[str]:
    """Return ids whose trigger now holds and that are not yet unlocked.

    Pure: *state* is not modified.
    """
    return {
        a.id
        for a in achievements
        if not state.has_achievement(a.id) and a.is_met(state)
    }
