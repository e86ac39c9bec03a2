"""Tests for engine module."""
import math

import pytest

from goldmine.catalog import Catalog, UnknownUpgradeError, UpgradeDefinition
from goldmine.commands import Click, Direction, Navigate, Purchase, Quit, SwitchTab, ToggleHelp
from goldmine.config import EngineConfig
from goldmine.engine import PurchaseOutcome, SimulationEngine
from goldmine.state import Tab


def _engine_with_gold(amount: float) -> SimulationEngine:
    engine = SimulationEngine()
    engine.state.currency = amount
    return engine


# ── Purchases ────────────────────────────────────────────────────────


def test_pickaxe_costs_escalate():
    engine = _engine_with_gold(100.0)
    costs = [engine.handle_purchase("pickaxe").cost for _ in range(3)]
    assert costs == [pytest.approx(10.0), pytest.approx(11.5), pytest.approx(13.225)]
    assert engine.state.owned_count("pickaxe") == 3
    assert engine.state.currency == pytest.approx(100.0 - 34.725)


def test_nth_purchase_cost_formula():
    engine = _engine_with_gold(1e12)
    udef = engine.catalog.require("steel_tools")
    for n in range(10):
        result = engine.handle_purchase("steel_tools")
        assert result.cost == pytest.approx(udef.base_cost * udef.cost_multiplier ** n)


def test_purchase_insufficient_funds():
    engine = _engine_with_gold(9.99)
    result = engine.handle_purchase("pickaxe")
    assert not result.success
    assert result.outcome is PurchaseOutcome.INSUFFICIENT_FUNDS
    assert result.cost == pytest.approx(10.0)
    assert engine.state.currency == 9.99
    assert engine.state.owned_count("pickaxe") == 0


def test_purchase_exact_balance():
    engine = _engine_with_gold(10.0)
    result = engine.handle_purchase("pickaxe")
    assert result.success
    assert engine.state.currency == pytest.approx(0.0)
    assert engine.state.owned_count("pickaxe") == 1


def test_purchase_does_not_touch_lifetime_earned():
    engine = _engine_with_gold(500.0)
    engine.state.lifetime_earned = 500.0
    engine.handle_purchase("shovel")
    assert engine.state.lifetime_earned == 500.0


def test_purchase_unknown_upgrade():
    engine = _engine_with_gold(1000.0)
    with pytest.raises(UnknownUpgradeError):
        engine.handle_purchase("nonexistent")
    assert engine.state.currency == 1000.0


def test_one_pickaxe_for_100_seconds():
    engine = SimulationEngine()
    engine.state.upgrades["pickaxe"].owned_count = 1
    engine.tick(100.0)
    assert engine.state.currency == pytest.approx(10.0)
    assert engine.state.lifetime_earned == pytest.approx(10.0)
    # Second pickaxe costs 11.5, so 10 gold is not enough
    assert not engine.handle_purchase("pickaxe").success
    assert engine.state.owned_count("pickaxe") == 1


# ── Ticks ────────────────────────────────────────────────────────────


def test_tick_without_upgrades():
    engine = SimulationEngine()
    engine.tick(10.0)
    assert engine.state.currency == 0.0
    assert engine.state.time_elapsed == 10.0


def test_tick_split_matches_single_tick():
    whole = SimulationEngine()
    split = SimulationEngine()
    for engine in (whole, split):
        engine.state.upgrades["pickaxe"].owned_count = 3
        engine.state.upgrades["drill"].owned_count = 2

    whole.tick(1.0)
    split.tick(0.5)
    split.tick(0.5)
    assert split.state.currency == pytest.approx(whole.state.currency)
    assert split.state.lifetime_earned == pytest.approx(whole.state.lifetime_earned)
    assert whole.state.currency == pytest.approx(4.3)


def test_tick_clamps_long_stall():
    engine = SimulationEngine(config=EngineConfig(max_tick_seconds=60.0))
    engine.state.upgrades["shovel"].owned_count = 2  # 1 gold/sec
    engine.tick(3600.0)
    assert engine.state.currency == pytest.approx(60.0)
    assert engine.state.time_elapsed == 60.0


@pytest.mark.parametrize("elapsed", [-5.0, math.nan])
def test_tick_ignores_invalid_elapsed(elapsed):
    engine = SimulationEngine()
    engine.state.upgrades["shovel"].owned_count = 2
    engine.tick(elapsed)
    assert engine.state.currency == 0.0
    assert engine.state.time_elapsed == 0.0


def test_lifetime_earned_never_decreases():
    engine = SimulationEngine(config=EngineConfig(base_click_value=20.0))
    history = [engine.state.lifetime_earned]
    for step in range(40):
        engine.tick(0.5)
        engine.handle_click()
        engine.handle_purchase("pickaxe" if step % 2 else "strong_arms")
        history.append(engine.state.lifetime_earned)
    assert history == sorted(history)
    assert engine.state.lifetime_earned >= engine.state.currency


# ── Clicks ───────────────────────────────────────────────────────────


def test_click_adds_click_power():
    engine = SimulationEngine()
    assert engine.handle_click(now=0.0)
    assert engine.state.currency == pytest.approx(1.0)
    assert engine.state.lifetime_earned == pytest.approx(1.0)
    assert engine.state.click_count == 1
    assert engine.state.last_click_time == 0.0


def test_click_with_upgrades():
    engine = SimulationEngine()
    engine.state.upgrades["strong_arms"].owned_count = 2
    engine.state.upgrades["power_gloves"].owned_count = 1
    engine.handle_click(now=0.0)
    assert engine.state.currency == pytest.approx(1.0 + 2.0 + 5.0)


def test_click_cooldown():
    engine = SimulationEngine()
    assert engine.handle_click(now=10.0)
    assert not engine.handle_click(now=10.25)
    assert not engine.handle_click(now=10.49)
    assert engine.state.click_count == 1
    assert engine.state.currency == pytest.approx(1.0)
    assert engine.state.last_click_time == 10.0

    assert engine.handle_click(now=10.5)
    assert engine.state.click_count == 2
    assert engine.handle_click(now=11.75)
    assert engine.state.click_count == 3


def test_click_uses_game_clock_by_default():
    engine = SimulationEngine()
    assert engine.handle_click()
    assert not engine.handle_click()
    engine.tick(0.5)
    assert engine.handle_click()
    assert engine.state.last_click_time == 0.5


def test_click_cooldown_survives_float_drift():
    engine = SimulationEngine()
    accepted = 0
    for _ in range(100):
        engine.tick(0.1)
        accepted += engine.handle_click()
    # 0.1 s ticks sum to values like 0.7999999999999999; every fifth tick clicks
    assert accepted == 20
    assert engine.state.click_count == 20


def test_click_cooldown_configurable():
    engine = SimulationEngine(config=EngineConfig(click_cooldown=0.0))
    assert engine.handle_click()
    assert engine.handle_click()
    assert engine.state.click_count == 2


# ── Achievements ─────────────────────────────────────────────────────


def test_first_steps_stays_unlocked_after_spending():
    engine = SimulationEngine(config=EngineConfig(base_click_value=100.0))
    engine.handle_click()
    assert engine.state.has_achievement("first_steps")

    assert engine.handle_purchase("shovel").success
    assert engine.state.currency == pytest.approx(50.0)
    assert engine.check_achievements() == []
    assert engine.state.has_achievement("first_steps")


def test_first_steps_unlocks_when_crossing_100():
    engine = SimulationEngine()
    engine.state.upgrades["shovel"].owned_count = 2  # 1 gold/sec
    engine.tick(99.0)
    assert not engine.state.has_achievement("first_steps")
    engine.tick(1.0)
    assert engine.state.has_achievement("first_steps")
    assert engine.state.unlocked_achievements["first_steps"] == pytest.approx(100.0)


def test_purchase_unlocks_rate_achievement():
    engine = _engine_with_gold(25_000.0)
    engine.handle_purchase("gold_factory")
    assert engine.state.has_achievement("passive_income")
    assert engine.state.has_achievement("gold_rush")


def test_check_achievements_returns_new_ids_in_table_order():
    engine = SimulationEngine()
    engine.state.lifetime_earned = 20_000.0
    engine.state.click_count = 1000
    assert engine.check_achievements() == ["first_steps", "getting_rich", "click_master"]
    assert engine.check_achievements() == []


# ── Navigation ───────────────────────────────────────────────────────


def test_navigate_clamps():
    engine = SimulationEngine()
    engine.handle_navigate(Direction.UP)
    assert engine.state.selected_index == 0
    for _ in range(10):
        engine.handle_navigate(Direction.DOWN)
    assert engine.state.selected_index == 5  # six passive upgrades
    engine.handle_navigate(Direction.UP)
    assert engine.state.selected_index == 4


def test_navigate_achievements_tab():
    engine = SimulationEngine()
    engine.handle_switch_tab(Tab.ACHIEVEMENTS)
    for _ in range(20):
        engine.handle_navigate(Direction.DOWN)
    assert engine.state.selected_index == 7


def test_switch_tab_resets_cursor():
    engine = SimulationEngine()
    engine.handle_navigate(Direction.DOWN)
    engine.handle_navigate(Direction.DOWN)
    engine.handle_switch_tab(Tab.PASSIVE)
    assert engine.state.selected_index == 2  # same tab keeps the cursor
    engine.handle_switch_tab(Tab.CLICK)
    assert engine.state.active_tab is Tab.CLICK
    assert engine.state.selected_index == 0
    for _ in range(10):
        engine.handle_navigate(Direction.DOWN)
    assert engine.state.selected_index == 4


def test_navigation_never_touches_economy():
    engine = _engine_with_gold(42.0)
    engine.handle_navigate(Direction.DOWN)
    engine.handle_switch_tab(Tab.ACHIEVEMENTS)
    assert engine.state.currency == 42.0
    assert engine.state.total_owned() == 0


def test_selected_upgrade():
    engine = SimulationEngine()
    assert engine.selected_upgrade().id == "pickaxe"
    engine.handle_navigate(Direction.DOWN)
    assert engine.selected_upgrade().id == "shovel"
    engine.handle_switch_tab(Tab.CLICK)
    assert engine.selected_upgrade().id == "strong_arms"
    engine.handle_switch_tab(Tab.ACHIEVEMENTS)
    assert engine.selected_upgrade() is None


# ── Command dispatch ─────────────────────────────────────────────────


def test_handle_purchase_selected():
    engine = _engine_with_gold(1000.0)
    engine.handle(Navigate(Direction.DOWN))
    result = engine.handle(Purchase())
    assert result.success
    assert result.upgrade_id == "shovel"
    assert engine.state.owned_count("shovel") == 1


def test_handle_purchase_explicit_id():
    engine = _engine_with_gold(1000.0)
    result = engine.handle(Purchase("drill"))
    assert result.success
    assert engine.state.owned_count("drill") == 1


def test_handle_purchase_on_achievements_tab():
    engine = _engine_with_gold(1000.0)
    engine.handle(SwitchTab(Tab.ACHIEVEMENTS))
    result = engine.handle(Purchase())
    assert result.outcome is PurchaseOutcome.NOTHING_SELECTED
    assert engine.state.currency == 1000.0


def test_handle_click():
    engine = SimulationEngine()
    assert engine.handle(Click()) is True
    assert engine.handle(Click()) is False


def test_handle_presentation_only_commands():
    engine = _engine_with_gold(5.0)
    assert engine.handle(ToggleHelp()) is None
    assert engine.handle(Quit()) is None
    assert engine.state.currency == 5.0


def test_handle_unknown_command():
    engine = SimulationEngine()
    with pytest.raises(TypeError, match="Unknown command"):
        engine.handle("click")


# ── Construction & queries ───────────────────────────────────────────


def test_invalid_catalog():
    catalog = Catalog([UpgradeDefinition("bad", base_cost=-1.0)])
    with pytest.raises(ValueError, match="Invalid catalog"):
        SimulationEngine(catalog=catalog)


def test_invalid_config():
    with pytest.raises(ValueError, match="Invalid config"):
        SimulationEngine(config=EngineConfig(click_cooldown=-1.0))


def test_snapshot():
    engine = _engine_with_gold(60.0)
    engine.handle_purchase("pickaxe")
    snap = engine.snapshot()
    assert snap.currency == pytest.approx(50.0)
    assert snap.passive_rate == pytest.approx(0.1)
    assert snap.click_power == pytest.approx(1.0)
    pickaxe = snap.upgrade("pickaxe")
    assert pickaxe.owned_count == 1
    assert pickaxe.next_cost == pytest.approx(11.5)
    assert pickaxe.affordable
    assert not snap.upgrade("drill").affordable
    assert [u.id for u in snap.visible_upgrades()][0] == "pickaxe"
    assert snap.unlocked_achievements == frozenset()
    assert snap.active_tab is Tab.PASSIVE
    assert not snap.show_help


def test_snapshot_is_detached_from_state():
    engine = _engine_with_gold(60.0)
    snap = engine.snapshot()
    engine.handle_purchase("pickaxe")
    assert snap.currency == 60.0
    assert snap.upgrade("pickaxe").owned_count == 0


def test_affordable_upgrades():
    engine = _engine_with_gold(30.0)
    ids = {u.id for u in engine.get_affordable_upgrades()}
    assert ids == {"pickaxe", "strong_arms"}


def test_compute_time_to_afford():
    engine = SimulationEngine()
    assert engine.compute_time_to_afford("pickaxe") is None
    engine.state.upgrades["shovel"].owned_count = 2  # 1 gold/sec
    assert engine.compute_time_to_afford("pickaxe") == pytest.approx(10.0)
    engine.state.currency = 10.0
    assert engine.compute_time_to_afford("pickaxe") == 0.0
