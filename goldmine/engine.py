from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

from goldmine.achievement import ACHIEVEMENTS, AchievementDef, evaluate_achievements
from goldmine.catalog import Catalog, UnknownUpgradeError, UpgradeDefinition, default_catalog
from goldmine.commands import (
    Click,
    Command,
    Direction,
    Navigate,
    Purchase,
    Quit,
    SwitchTab,
    ToggleHelp,
)
from goldmine.config import EngineConfig
from goldmine.snapshot import GameSnapshot, UpgradeStatus, build_snapshot
from goldmine.state import GameState, Tab

logger = logging.getLogger(__name__)

# Slack for game-clock drift when comparing summed float ticks
_CLOCK_EPSILON = 1e-9


class PurchaseOutcome(Enum):
    SUCCESS = auto()
    INSUFFICIENT_FUNDS = auto()
    NOTHING_SELECTED = auto()


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase attempt."""

    outcome: PurchaseOutcome
    upgrade_id: str = ""
    cost: float = 0.0

    @property
    def success(self) -> bool:
        return self.outcome is PurchaseOutcome.SUCCESS


class SimulationEngine:
    """Authoritative game logic processor; the only writer of GameState."""

    def __init__(
        self,
        catalog: Catalog | None = None,
        config: EngineConfig | None = None,
        achievements: Iterable[AchievementDef] = ACHIEVEMENTS,
    ) -> None:
        catalog = catalog if catalog is not None else default_catalog()
        config = config if config is not None else EngineConfig()

        for label, errors in (("catalog", catalog.validate()), ("config", config.validate())):
            if errors:
                raise ValueError(
                    f"Invalid {label}:\n" + "\n".join(f"  - {e}" for e in errors)
                )

        self.catalog = catalog
        self.config = config
        self.achievements = tuple(achievements)
        self.state = GameState(catalog, base_click_value=config.base_click_value)

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, elapsed_seconds: float) -> None:
        """Advance the game by *elapsed_seconds* of passive production."""
        delta = self._clamp_elapsed(elapsed_seconds)

        earned = self.state.passive_rate() * delta
        if earned > 0:
            self._earn(earned)
        self.state.time_elapsed += delta

        self.check_achievements()

    # ── Player actions ───────────────────────────────────────────────

    def handle_click(self, now: float | None = None) -> bool:
        """Mine gold by hand. Returns False if the click is still on cooldown."""
        state = self.state
        if now is None:
            now = state.time_elapsed

        last = state.last_click_time
        if last is not None and now - last < self.config.click_cooldown - _CLOCK_EPSILON:
            logger.debug("Click at %.3fs ignored, last accepted at %.3fs", now, last)
            return False

        self._earn(state.click_power())
        state.click_count += 1
        state.last_click_time = now

        self.check_achievements()
        return True

    def handle_purchase(self, upgrade_id: str) -> PurchaseResult:
        """Attempt to buy one unit of an upgrade. Applied fully or not at all."""
        if upgrade_id not in self.catalog:
            raise UnknownUpgradeError(upgrade_id)

        state = self.state
        cost = state.next_cost(upgrade_id)
        if state.currency < cost:
            logger.debug(
                "Cannot afford %s: cost %.2f, have %.2f", upgrade_id, cost, state.currency
            )
            return PurchaseResult(PurchaseOutcome.INSUFFICIENT_FUNDS, upgrade_id, cost)

        state.currency -= cost
        state.upgrades[upgrade_id].owned_count += 1

        self.check_achievements()
        return PurchaseResult(PurchaseOutcome.SUCCESS, upgrade_id, cost)

    def purchase_selected(self) -> PurchaseResult:
        udef = self.selected_upgrade()
        if udef is None:
            return PurchaseResult(PurchaseOutcome.NOTHING_SELECTED)
        return self.handle_purchase(udef.id)

    def handle_navigate(self, direction: Direction) -> None:
        """Move the cursor, clamped to the active tab's list."""
        last_index = max(self.selectable_count() - 1, 0)
        index = self.state.selected_index + direction.value
        self.state.selected_index = min(max(index, 0), last_index)

    def handle_switch_tab(self, tab: Tab) -> None:
        if self.state.active_tab is not tab:
            self.state.active_tab = tab
            self.state.selected_index = 0

    def handle(self, command: Command) -> PurchaseResult | bool | None:
        """Dispatch a presentation command to the matching action."""
        if isinstance(command, Click):
            return self.handle_click()
        if isinstance(command, Purchase):
            if command.upgrade_id is None:
                return self.purchase_selected()
            return self.handle_purchase(command.upgrade_id)
        if isinstance(command, Navigate):
            self.handle_navigate(command.direction)
            return None
        if isinstance(command, SwitchTab):
            self.handle_switch_tab(command.tab)
            return None
        if isinstance(command, (ToggleHelp, Quit)):
            return None
        raise TypeError(f"Unknown command: {command!r}")

    def check_achievements(self) -> list[str]:
        """Unlock newly satisfied achievements. Returns their ids in table order."""
        newly = evaluate_achievements(self.state, self.achievements)
        unlocked: list[str] = []
        for adef in self.achievements:
            if adef.id in newly:
                self.state.unlocked_achievements[adef.id] = self.state.time_elapsed
                unlocked.append(adef.id)
                logger.info(
                    "Achievement unlocked: %s at %.1fs",
                    adef.display_name,
                    self.state.time_elapsed,
                )
        return unlocked

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        """Return live reference to game state."""
        return self.state

    def snapshot(self, show_help: bool = False) -> GameSnapshot:
        return build_snapshot(self.state, self.achievements, show_help=show_help)

    def visible_upgrades(self) -> list[UpgradeDefinition]:
        category = self.state.active_tab.category
        if category is None:
            return []
        return self.catalog.by_category(category)

    def selectable_count(self) -> int:
        if self.state.active_tab is Tab.ACHIEVEMENTS:
            return len(self.achievements)
        return len(self.visible_upgrades())

    def selected_upgrade(self) -> UpgradeDefinition | None:
        visible = self.visible_upgrades()
        index = self.state.selected_index
        if 0 <= index < len(visible):
            return visible[index]
        return None

    def get_affordable_upgrades(self) -> list[UpgradeStatus]:
        return [u for u in self.snapshot().upgrades if u.affordable]

    def compute_time_to_afford(self, upgrade_id: str) -> float | None:
        """Seconds of passive income until affordable. None if never."""
        cost = self.state.next_cost(upgrade_id)
        if self.state.currency >= cost:
            return 0.0
        rate = self.state.passive_rate()
        if rate <= 0:
            return None
        return (cost - self.state.currency) / rate

    # ── Private helpers ──────────────────────────────────────────────

    def _earn(self, amount: float) -> None:
        self.state.currency += amount
        self.state.lifetime_earned += amount

    def _clamp_elapsed(self, elapsed: float) -> float:
        if math.isnan(elapsed) or elapsed < 0:
            logger.debug("Ignoring invalid elapsed time %r", elapsed)
            return 0.0
        limit = self.config.max_tick_seconds
        if elapsed > limit:
            logger.debug("Clamping tick of %.1fs to %.1fs", elapsed, limit)
            return limit
        return elapsed
