from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from goldmine.state import GameState


@dataclass
class GoldSnapshot:
    time: float
    currency: float
    lifetime_earned: float
    passive_rate: float
    click_power: float


@dataclass
class PurchaseEvent:
    time: float
    upgrade_id: str
    cost_paid: float
    currency_after: float


@dataclass
class AchievementEvent:
    time: float
    achievement_id: str


class MetricsCollector:
    """Collects simulation metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float | None = None

        self.snapshots: list[GoldSnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.achievements: list[AchievementEvent] = []
        self.clicks_accepted = 0
        self.clicks_rejected = 0

    def record_tick(self, state: GameState) -> None:
        """Record a snapshot if enough time has passed."""
        last = self._last_snapshot_time
        if last is None or state.time_elapsed - last >= self.snapshot_interval:
            self.snapshots.append(
                GoldSnapshot(
                    time=state.time_elapsed,
                    currency=state.currency,
                    lifetime_earned=state.lifetime_earned,
                    passive_rate=state.passive_rate(),
                    click_power=state.click_power(),
                )
            )
            self._last_snapshot_time = state.time_elapsed

    def record_purchase(self, state: GameState, upgrade_id: str, cost_paid: float) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=state.time_elapsed,
                upgrade_id=upgrade_id,
                cost_paid=cost_paid,
                currency_after=state.currency,
            )
        )

    def record_click(self, accepted: bool) -> None:
        if accepted:
            self.clicks_accepted += 1
        else:
            self.clicks_rejected += 1

    def record_achievement(self, achievement_id: str, time: float) -> None:
        self.achievements.append(AchievementEvent(time=time, achievement_id=achievement_id))
