from __future__ import annotations

import logging
import math

from goldmine.catalog import Catalog
from goldmine.config import EngineConfig
from goldmine.engine import SimulationEngine
from goldmine.metrics import MetricsCollector
from goldmine.report import SimulationReport, build_report
from goldmine.strategy import Strategy

logger = logging.getLogger(__name__)

MAX_TICKS = 10_000_000


class Simulation:
    """Plays a game headlessly with a strategy for a fixed amount of game time."""

    def __init__(
        self,
        strategy: Strategy,
        duration: float,
        tick_resolution: float = 0.5,
        catalog: Catalog | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError(f"tick_resolution must be positive, got {tick_resolution}")
        self.strategy = strategy
        self.duration = duration
        self.tick_resolution = tick_resolution

        self.engine = SimulationEngine(catalog=catalog, config=config)
        if tick_resolution > self.engine.config.max_tick_seconds:
            logger.warning(
                "tick_resolution %.1fs exceeds max_tick_seconds %.1fs; ticks will be clamped",
                tick_resolution,
                self.engine.config.max_tick_seconds,
            )
        self.collector = MetricsCollector(snapshot_interval=max(tick_resolution, 1.0))

    def run(self) -> SimulationReport:
        engine = self.engine
        state = engine.get_state()
        achievements_seen: set[str] = set()
        tick_count = 0

        self.collector.record_tick(state)

        while state.time_elapsed < self.duration:
            tick_count += 1
            if tick_count > MAX_TICKS:
                return self._build_report("Max ticks reached")

            # 1. Advance time
            engine.tick(self.tick_resolution)

            # 2. Process clicks
            for _ in range(self.strategy.get_clicks(state, self.tick_resolution)):
                self.collector.record_click(engine.handle_click())

            # 3. Evaluate purchases
            affordable = engine.get_affordable_upgrades()
            for upgrade_id in self.strategy.decide_purchases(state, affordable):
                result = engine.handle_purchase(upgrade_id)
                if result.success:
                    self.collector.record_purchase(state, upgrade_id, result.cost)

            # 4. Check for new achievements
            for aid, atime in state.unlocked_achievements.items():
                if aid not in achievements_seen:
                    achievements_seen.add(aid)
                    self.collector.record_achievement(aid, atime)

            # 5. Record metrics
            self.collector.record_tick(state)

            if math.isnan(state.currency) or math.isinf(state.currency):
                return self._build_report("Aborted: NaN/Inf detected")

        return self._build_report("Duration reached")

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.engine.get_state()
        logger.debug("Simulation finished at %.1fs: %s", state.time_elapsed, outcome)
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=state.time_elapsed,
            final_currency=state.currency,
            final_lifetime_earned=state.lifetime_earned,
            final_passive_rate=state.passive_rate(),
            final_click_power=state.click_power(),
            owned_counts={uid: us.owned_count for uid, us in state.upgrades.items()},
        )
