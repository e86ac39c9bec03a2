from __future__ import annotations

from itertools import accumulate

from goldmine.report import SimulationReport


def _finish(ax, title: str, ylabel: str = "") -> None:
    ax.set_title(title)
    ax.set_xlabel("Time (s)")
    if ylabel:
        ax.set_ylabel(ylabel)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Plot gold, income, upgrade counts and purchase costs over a run.

    Needs the optional ``viz`` extra (matplotlib).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install with: pip install goldmine[viz]"
        )

    times = [s.time for s in report.snapshots]
    fig, ((gold_ax, income_ax), (owned_ax, cost_ax)) = plt.subplots(
        2, 2, figsize=(14, 10)
    )
    fig.suptitle(f"Gold Mine Simulation: {report.strategy_description}", fontsize=14)

    # Gold on hand vs. total mined; achievements as vertical markers
    gold_ax.plot(times, [max(s.currency, 1e-10) for s in report.snapshots], label="gold")
    gold_ax.plot(
        times,
        [max(s.lifetime_earned, 1e-10) for s in report.snapshots],
        label="lifetime earned",
    )
    for a in report.achievements:
        gold_ax.axvline(a.time, color="gray", linestyle=":", alpha=0.5)
    gold_ax.set_yscale("log")
    _finish(gold_ax, "Gold", "Gold")

    income_ax.plot(times, [s.passive_rate for s in report.snapshots], label="gold/sec")
    income_ax.plot(times, [s.click_power for s in report.snapshots], label="gold/click")
    _finish(income_ax, "Income")

    # One step line per upgrade, in order of first purchase
    for upgrade_id in dict.fromkeys(p.upgrade_id for p in report.purchases):
        bought = [p.time for p in report.purchases if p.upgrade_id == upgrade_id]
        owned_ax.step(
            [0.0, *bought, report.total_time],
            [0, *accumulate(1 for _ in bought), len(bought)],
            where="post",
            label=upgrade_id,
        )
    _finish(owned_ax, "Upgrades Owned", "Count")

    if report.purchases:
        cost_ax.scatter(
            [p.time for p in report.purchases],
            [p.cost_paid for p in report.purchases],
            s=10,
            alpha=0.6,
        )
        cost_ax.set_yscale("log")
    _finish(cost_ax, "Purchase Cost", "Gold paid")

    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
