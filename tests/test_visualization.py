"""Tests for the optional plot output."""
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from goldmine.simulation import Simulation  # noqa: E402
from goldmine.strategy import ClickProfile, GreedyCheapest  # noqa: E402
from goldmine.visualization import plot_simulation  # noqa: E402


def test_plot_writes_png(tmp_path):
    strategy = GreedyCheapest(click_profile=ClickProfile(clicks_per_second=2.0))
    report = Simulation(strategy=strategy, duration=300).run()
    path = tmp_path / "run.png"
    plot_simulation(report, str(path))
    assert path.exists()
    assert path.stat().st_size > 0
