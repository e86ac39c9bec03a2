from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable

from goldmine.commands import Command, Quit, ToggleHelp
from goldmine.engine import SimulationEngine
from goldmine.snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class Presentation(ABC):
    """Extension point for anything that draws the game and reads input."""

    @abstractmethod
    def render(self, snapshot: GameSnapshot) -> None: ...

    @abstractmethod
    def poll(self, timeout: float) -> list[Command]:
        """Wait up to *timeout* seconds for input; return the commands read."""
        ...

    def on_achievement(self, achievement_id: str) -> None:
        """Called once per newly unlocked achievement."""


class GameLoop:
    """Single-threaded frame loop: tick, drain input, check achievements, draw."""

    def __init__(
        self,
        engine: SimulationEngine,
        presentation: Presentation,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.engine = engine
        self.presentation = presentation
        self.clock = clock
        self.running = False
        self.show_help = False
        self._queue: deque[Command] = deque(maxlen=engine.config.input_queue_size)

    def submit(self, command: Command) -> None:
        """Queue a command for the next frame. Drops the oldest when full."""
        if len(self._queue) == self._queue.maxlen:
            logger.warning("Input queue full, dropping %r", self._queue[0])
        self._queue.append(command)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def step(self, elapsed: float) -> GameSnapshot:
        """Run one frame and return the snapshot handed to the presentation."""
        unlocked = self.engine.state.unlocked_achievements
        seen = set(unlocked)

        self.engine.tick(elapsed)

        while self._queue:
            command = self._queue.popleft()
            if isinstance(command, Quit):
                self.running = False
                self._queue.clear()
                break
            if isinstance(command, ToggleHelp):
                self.show_help = not self.show_help
                continue
            self.engine.handle(command)

        self.engine.check_achievements()
        for achievement_id in [a for a in unlocked if a not in seen]:
            self.presentation.on_achievement(achievement_id)

        snapshot = self.engine.snapshot(show_help=self.show_help)
        self.presentation.render(snapshot)
        return snapshot

    def run(self) -> None:
        """Loop until a Quit command arrives."""
        self.running = True
        frame = self.engine.config.frame_interval
        self.presentation.render(self.engine.snapshot(show_help=self.show_help))
        last = self.clock()

        while self.running:
            for command in self.presentation.poll(frame):
                self.submit(command)
            now = self.clock()
            self.step(now - last)
            last = now
