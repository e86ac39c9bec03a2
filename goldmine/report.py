from __future__ import annotations

from dataclasses import dataclass, field

from goldmine.metrics import (
    AchievementEvent,
    GoldSnapshot,
    MetricsCollector,
    PurchaseEvent,
)


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    outcome: str = ""
    total_time: float = 0.0

    # Final state
    final_currency: float = 0.0
    final_lifetime_earned: float = 0.0
    final_passive_rate: float = 0.0
    final_click_power: float = 0.0
    owned_counts: dict[str, int] = field(default_factory=dict)

    # Raw metrics
    snapshots: list[GoldSnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    achievements: list[AchievementEvent] = field(default_factory=list)
    clicks_accepted: int = 0
    clicks_rejected: int = 0

    # Derived metrics
    achievement_times: dict[str, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def achievement_time(self, achievement_id: str) -> float | None:
        return self.achievement_times.get(achievement_id)

    def gold_series(self) -> list[tuple[float, float]]:
        """Return (time, currency) series."""
        return [(s.time, s.currency) for s in self.snapshots]

    def rate_series(self) -> list[tuple[float, float]]:
        """Return (time, passive_rate) series."""
        return [(s.time, s.passive_rate) for s in self.snapshots]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    outcome: str,
    total_time: float,
    **final_state,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics.

    *final_state* holds the ``final_*`` and ``owned_counts`` fields.
    """
    achievement_times = {a.achievement_id: a.time for a in collector.achievements}

    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])  # gap from t=0 to first purchase
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        outcome=outcome,
        total_time=total_time,
        snapshots=collector.snapshots,
        purchases=collector.purchases,
        achievements=collector.achievements,
        clicks_accepted=collector.clicks_accepted,
        clicks_rejected=collector.clicks_rejected,
        achievement_times=achievement_times,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
        **final_state,
    )
