from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Top-level game configuration."""

    name: str = "Terminal Gold Mine"
    frame_rate: int = 10
    click_cooldown: float = 0.5
    base_click_value: float = 1.0
    # Upper bound on credited time per tick, so a stalled loop cannot
    # catch up with an unbounded burst of passive income.
    max_tick_seconds: float = 300.0
    input_queue_size: int = 64

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.frame_rate

    def validate(self) -> list[str]:
        """Check for invalid settings. Returns list of error messages."""
        errors: list[str] = []
        if self.frame_rate <= 0:
            errors.append(f"frame_rate must be positive, got {self.frame_rate}")
        if self.click_cooldown < 0:
            errors.append(f"click_cooldown must be non-negative, got {self.click_cooldown}")
        if self.base_click_value < 0:
            errors.append(
                f"base_click_value must be non-negative, got {self.base_click_value}"
            )
        if self.max_tick_seconds <= 0:
            errors.append(
                f"max_tick_seconds must be positive, got {self.max_tick_seconds}"
            )
        if self.input_queue_size < 1:
            errors.append(
                f"input_queue_size must be at least 1, got {self.input_queue_size}"
            )
        return errors
