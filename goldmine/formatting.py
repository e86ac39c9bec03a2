from __future__ import annotations

from goldmine.achievement import ACHIEVEMENTS
from goldmine.catalog import Catalog
from goldmine.report import SimulationReport


def format_number(num: float) -> str:
    """Two decimals with K/M suffixes: 999.50, 1.50K, 2.25M."""
    if num >= 1_000_000.0:
        return f"{num / 1_000_000.0:.2f}M"
    if num >= 1_000.0:
        return f"{num / 1_000.0:.2f}K"
    return f"{num:.2f}"


def format_catalog(catalog: Catalog) -> str:
    """Format the upgrade and achievement tables for console output."""
    lines: list[str] = ["UPGRADES:"]
    for udef in catalog:
        effect = f"+{format_number(udef.effect_magnitude)}{udef.effect_unit}"
        lines.append(
            f"  {udef.display_name:.<24s} {udef.category.value:<8s}"
            f" cost {format_number(udef.base_cost):>8s} x{udef.cost_multiplier:<5g} {effect}"
        )
    lines.append("")
    lines.append("ACHIEVEMENTS:")
    for adef in ACHIEVEMENTS:
        lines.append(f"  {adef.display_name:.<24s} {adef.description}")
    return "\n".join(lines)


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " Gold Mine Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append("")

    lines.append("FINAL STATE:")
    lines.append(f"  Gold: {format_number(report.final_currency)}")
    lines.append(f"  Total earned: {format_number(report.final_lifetime_earned)}")
    lines.append(f"  Rate: {format_number(report.final_passive_rate)}/sec")
    lines.append(f"  Click: +{format_number(report.final_click_power)}")
    lines.append(
        f"  Clicks: {report.clicks_accepted} accepted, {report.clicks_rejected} on cooldown"
    )
    owned = [(uid, n) for uid, n in report.owned_counts.items() if n > 0]
    if owned:
        lines.append("  Owned: " + ", ".join(f"{uid} x{n}" for uid, n in owned))
    lines.append("")

    if report.achievements:
        lines.append("ACHIEVEMENTS:")
        for a in report.achievements:
            lines.append(f"  * {a.achievement_id:.<30s} {a.time:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")

    return "\n".join(lines)
