"""MCP server wrapping SimulationEngine for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from goldmine.catalog import Catalog, default_catalog
from goldmine.commands import Direction
from goldmine.config import EngineConfig
from goldmine.engine import SimulationEngine
from goldmine.snapshot import GameSnapshot
from goldmine.state import Tab

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400


@dataclass
class _GameHolder:
    """Holds the active catalog, config and engine."""

    catalog: Catalog
    config: EngineConfig
    engine: SimulationEngine
    achievements_reported: set[str] = field(default_factory=set)


def _new_holder(catalog: Catalog | None = None, config: EngineConfig | None = None) -> _GameHolder:
    catalog = catalog if catalog is not None else default_catalog()
    config = config if config is not None else EngineConfig()
    return _GameHolder(
        catalog=catalog,
        config=config,
        engine=SimulationEngine(catalog=catalog, config=config),
    )


def _snapshot_dict(snapshot: GameSnapshot) -> dict[str, Any]:
    return {
        "time_elapsed": round(snapshot.time_elapsed, 2),
        "currency": round(snapshot.currency, 2),
        "lifetime_earned": round(snapshot.lifetime_earned, 2),
        "passive_rate": round(snapshot.passive_rate, 4),
        "click_power": round(snapshot.click_power, 2),
        "click_count": snapshot.click_count,
        "upgrades": {
            u.id: {
                "owned": u.owned_count,
                "next_cost": round(u.next_cost, 2),
                "affordable": u.affordable,
            }
            for u in snapshot.upgrades
        },
        "achievements": {
            a.id: {
                "unlocked": a.unlocked,
                "progress": round(a.progress, 2),
                "target": a.target,
            }
            for a in snapshot.achievements
        },
        "active_tab": snapshot.active_tab.value,
        "selected_index": snapshot.selected_index,
    }


def _report_new_achievements(holder: _GameHolder, result: dict[str, Any]) -> None:
    """Add unlocks not yet shown to the client under ``new_achievements``."""
    new = [
        a for a in holder.engine.state.unlocked_achievements
        if a not in holder.achievements_reported
    ]
    if new:
        holder.achievements_reported.update(new)
        result["new_achievements"] = new


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    return {
        "name": holder.config.name,
        "click_cooldown": holder.config.click_cooldown,
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "description": u.description,
                "category": u.category.value,
                "base_cost": u.base_cost,
                "cost_multiplier": u.cost_multiplier,
                "effect": f"+{u.effect_magnitude}{u.effect_unit}",
            }
            for u in holder.catalog
        ],
        "achievements": [
            {"id": a.id, "display_name": a.display_name, "description": a.description}
            for a in holder.engine.achievements
        ],
        "tabs": [t.value for t in Tab],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    return _snapshot_dict(holder.engine.snapshot())


def _tool_click(holder: _GameHolder) -> dict[str, Any]:
    engine = holder.engine
    before = engine.state.currency
    accepted = engine.handle_click()
    result: dict[str, Any] = {
        "accepted": accepted,
        "earned": round(engine.state.currency - before, 2),
        "new_balance": round(engine.state.currency, 2),
    }
    if accepted:
        _report_new_achievements(holder, result)
    else:
        result["reason"] = (
            f"Cooldown: wait {holder.config.click_cooldown}s between clicks"
        )
    return result


def _tool_purchase(holder: _GameHolder, upgrade_id: str | None = None) -> dict[str, Any]:
    if upgrade_id is not None and upgrade_id not in holder.catalog:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}

    engine = holder.engine
    if upgrade_id is None:
        result = engine.purchase_selected()
    else:
        result = engine.handle_purchase(upgrade_id)

    if result.success:
        response: dict[str, Any] = {
            "success": True,
            "upgrade_id": result.upgrade_id,
            "cost_paid": round(result.cost, 2),
            "new_count": engine.state.owned_count(result.upgrade_id),
            "new_balance": round(engine.state.currency, 2),
        }
        _report_new_achievements(holder, response)
        return response
    response = {"success": False, "reason": result.outcome.name}
    if result.upgrade_id:
        response["cost"] = round(result.cost, 2)
        time_to_afford = engine.compute_time_to_afford(result.upgrade_id)
        response["time_to_afford"] = (
            round(time_to_afford, 2) if time_to_afford is not None else None
        )
    return response


def _tool_navigate(holder: _GameHolder, direction: str) -> dict[str, Any]:
    try:
        d = Direction[direction.upper()]
    except KeyError:
        return {"error": f"Unknown direction: {direction!r}. Expected 'up' or 'down'"}
    holder.engine.handle_navigate(d)
    return _cursor(holder)


def _tool_switch_tab(holder: _GameHolder, tab: str) -> dict[str, Any]:
    try:
        t = Tab(tab.lower())
    except ValueError:
        return {"error": f"Unknown tab: {tab!r}. Expected one of {[t.value for t in Tab]}"}
    holder.engine.handle_switch_tab(t)
    return _cursor(holder)


def _cursor(holder: _GameHolder) -> dict[str, Any]:
    engine = holder.engine
    selected = engine.selected_upgrade()
    return {
        "active_tab": engine.state.active_tab.value,
        "selected_index": engine.state.selected_index,
        "selected_upgrade": selected.id if selected else None,
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    engine = holder.engine
    state = engine.get_state()

    # Subdivide into 1-second ticks
    remaining = seconds
    while remaining > 0:
        dt = min(1.0, remaining)
        engine.tick(dt)
        remaining -= dt

    result: dict[str, Any] = {
        "waited": seconds,
        "time_elapsed": round(state.time_elapsed, 2),
        "currency": round(state.currency, 2),
        "passive_rate": round(state.passive_rate(), 4),
    }
    _report_new_achievements(holder, result)
    return result


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.engine = SimulationEngine(catalog=holder.catalog, config=holder.config)
    holder.achievements_reported = set()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(
    catalog: Catalog | None = None,
    config: EngineConfig | None = None,
) -> FastMCP:
    """Create an MCP server wrapping a SimulationEngine."""
    holder = _new_holder(catalog, config)

    mcp = FastMCP(name=f"Gold Mine: {holder.config.name}")

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: upgrades with cost curves, achievements, tabs."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: gold, rates, owned upgrades with next cost, achievements, cursor."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def click() -> dict[str, Any]:
        """Mine gold by hand once. Rejected while the click cooldown is running."""
        return _tool_click(holder)

    @mcp.tool()
    def purchase(upgrade_id: str | None = None) -> dict[str, Any]:
        """Buy one upgrade, or the one under the cursor when no id is given."""
        return _tool_purchase(holder, upgrade_id)

    @mcp.tool()
    def navigate(direction: str) -> dict[str, Any]:
        """Move the cursor 'up' or 'down' within the active tab."""
        return _tool_navigate(holder, direction)

    @mcp.tool()
    def switch_tab(tab: str) -> dict[str, Any]:
        """Switch to the 'passive', 'click' or 'achievements' tab."""
        return _tool_switch_tab(holder, tab)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Time is subdivided into 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
