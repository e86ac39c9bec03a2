from __future__ import annotations

import csv
import json
from pathlib import Path

from goldmine.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export simulation data as CSV files.

    Creates three files:
      - {path}_gold.csv
      - {path}_purchases.csv
      - {path}_achievements.csv
    """
    base = str(path)

    with open(f"{base}_gold.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["time", "currency", "lifetime_earned", "passive_rate", "click_power"]
        )
        for s in report.snapshots:
            writer.writerow(
                [s.time, s.currency, s.lifetime_earned, s.passive_rate, s.click_power]
            )

    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "upgrade_id", "cost_paid", "currency_after"])
        for p in report.purchases:
            writer.writerow([p.time, p.upgrade_id, p.cost_paid, p.currency_after])

    with open(f"{base}_achievements.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "achievement_id"])
        for a in report.achievements:
            writer.writerow([a.time, a.achievement_id])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the simulation summary as JSON."""
    data = {
        "strategy": report.strategy_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "final_currency": report.final_currency,
        "final_lifetime_earned": report.final_lifetime_earned,
        "final_passive_rate": report.final_passive_rate,
        "final_click_power": report.final_click_power,
        "owned_counts": report.owned_counts,
        "clicks_accepted": report.clicks_accepted,
        "clicks_rejected": report.clicks_rejected,
        "achievement_times": report.achievement_times,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "purchases": [
            {"time": p.time, "upgrade_id": p.upgrade_id, "cost_paid": p.cost_paid}
            for p in report.purchases
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
