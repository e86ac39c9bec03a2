"""Tests for achievement module."""
import pytest

from goldmine.achievement import ACHIEVEMENTS, AchievementDef, evaluate_achievements
from goldmine.catalog import default_catalog
from goldmine.state import GameState


def _state() -> GameState:
    return GameState(default_catalog())


def test_achievement_table():
    ids = [a.id for a in ACHIEVEMENTS]
    assert ids == [
        "first_steps",
        "getting_rich",
        "millionaire",
        "passive_income",
        "gold_rush",
        "click_master",
        "power_clicker",
        "upgrade_collector",
    ]


def test_nothing_unlocked_at_start():
    assert evaluate_achievements(_state()) == set()


def test_lifetime_thresholds():
    state = _state()
    state.lifetime_earned = 99.99
    assert evaluate_achievements(state) == set()
    state.lifetime_earned = 100.0
    assert evaluate_achievements(state) == {"first_steps"}
    state.lifetime_earned = 1_000_000.0
    assert evaluate_achievements(state) == {"first_steps", "getting_rich", "millionaire"}


def test_passive_rate_thresholds():
    state = _state()
    state.upgrades["gold_factory"].owned_count = 1  # 100 gold/sec
    assert evaluate_achievements(state) == {"passive_income", "gold_rush"}


def test_click_count_threshold():
    state = _state()
    state.click_count = 999
    assert "click_master" not in evaluate_achievements(state)
    state.click_count = 1000
    assert "click_master" in evaluate_achievements(state)


def test_click_power_threshold():
    state = _state()
    state.upgrades["diamond_drill_bit"].owned_count = 1  # 1 + 25
    assert "power_clicker" not in evaluate_achievements(state)
    state.upgrades["strong_arms"].owned_count = 24  # 1 + 25 + 24 = 50
    assert "power_clicker" in evaluate_achievements(state)


def test_upgrade_collector_counts_all_categories():
    state = _state()
    state.upgrades["pickaxe"].owned_count = 30
    state.upgrades["strong_arms"].owned_count = 19
    assert "upgrade_collector" not in evaluate_achievements(state)
    state.upgrades["strong_arms"].owned_count = 20
    assert "upgrade_collector" in evaluate_achievements(state)


def test_already_unlocked_excluded():
    state = _state()
    state.lifetime_earned = 150.0
    state.unlocked_achievements["first_steps"] = 3.0
    assert evaluate_achievements(state) == set()


def test_evaluation_is_pure():
    state = _state()
    state.lifetime_earned = 150.0
    evaluate_achievements(state)
    assert state.unlocked_achievements == {}


def test_custom_table():
    table = [AchievementDef("handful", "Handful", "Click 3 times", "click_count", 3)]
    state = _state()
    state.click_count = 3
    state.lifetime_earned = 1e9
    assert evaluate_achievements(state, table) == {"handful"}


def test_progress():
    adef = AchievementDef("rich", metric="lifetime_earned", target=10.0)
    state = _state()
    state.lifetime_earned = 4.0
    assert adef.progress(state) == pytest.approx(4.0)
    assert adef.display_name == "rich"
    assert not adef.is_met(state)
