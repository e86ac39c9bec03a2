"""Scripted play session driving the frame loop with a status-line presentation."""
from __future__ import annotations

from goldmine.commands import Click, Command, Purchase, Quit, SwitchTab
from goldmine.engine import SimulationEngine
from goldmine.formatting import format_number
from goldmine.loop import GameLoop, Presentation
from goldmine.snapshot import GameSnapshot
from goldmine.state import Tab


class StatusLine(Presentation):
    """Prints one line per frame and replays scripted input batches."""

    def __init__(self, script: list[list[Command]], quiet: bool = False) -> None:
        self.script = list(script)
        self.quiet = quiet
        self.last: GameSnapshot | None = None
        self.unlocked: list[str] = []

    def render(self, snapshot: GameSnapshot) -> None:
        self.last = snapshot
        if self.quiet:
            return
        selected = snapshot.visible_upgrades()
        cursor = (
            selected[snapshot.selected_index].display_name
            if snapshot.selected_index < len(selected)
            else "-"
        )
        print(
            f"[{snapshot.time_elapsed:6.1f}s] "
            f"Gold: {format_number(snapshot.currency)} "
            f"({format_number(snapshot.passive_rate)}/sec, "
            f"+{format_number(snapshot.click_power)}/click) "
            f"tab={snapshot.active_tab.value} cursor={cursor}"
        )

    def poll(self, timeout: float) -> list[Command]:
        if self.script:
            return self.script.pop(0)
        return [Quit()]

    def on_achievement(self, achievement_id: str) -> None:
        self.unlocked.append(achievement_id)
        if not self.quiet:
            print(f"*** Achievement unlocked: {achievement_id} ***")


class VirtualClock:
    """Advances a fixed step per reading so the session replays identically."""

    def __init__(self, step: float) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


def define_session() -> list[list[Command]]:
    """Mine enough for a Pickaxe, then save up for Strong Arms."""
    script: list[list[Command]] = [[Click()] for _ in range(10)]
    script.append([Purchase()])
    script.append([SwitchTab(Tab.CLICK)])
    script.extend([Click()] for _ in range(25))
    script.append([Purchase()])
    return script


def run_session(frame_seconds: float = 0.5, quiet: bool = False) -> StatusLine:
    engine = SimulationEngine()
    presentation = StatusLine(define_session(), quiet=quiet)
    GameLoop(engine, presentation, clock=VirtualClock(frame_seconds)).run()
    return presentation


if __name__ == "__main__":
    run_session()
