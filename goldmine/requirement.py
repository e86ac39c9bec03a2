"""Threshold conditions over GameState.

Achievement triggers are built from these, and so are the stop conditions
for autoplay clicking::

    Req.any(Req.owns("drill"), Req.achievement("first_steps"))
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from goldmine.state import METRIC_NAMES

if TYPE_CHECKING:
    from goldmine.state import GameState

_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def _operator(op: str) -> Callable[[float, float], bool]:
    try:
        return _OPERATORS[op]
    except KeyError:
        raise ValueError(
            f"Unknown operator: {op!r}. Expected one of {list(_OPERATORS)}"
        ) from None


class Requirement(ABC):
    """A boolean condition on game state."""

    @abstractmethod
    def evaluate(self, state: GameState) -> bool: ...


# ── Private implementations ──────────────────────────────────────────


class _Threshold(Requirement):
    """``read(state) <op> threshold``."""

    def __init__(
        self,
        label: str,
        read: Callable[[GameState], float],
        op: str,
        threshold: float,
    ) -> None:
        self.label = label
        self.read = read
        self.op = op
        self.threshold = threshold
        self._check = _operator(op)

    def evaluate(self, state: GameState) -> bool:
        return self._check(self.read(state), self.threshold)

    def __repr__(self) -> str:
        return f"<{self.label} {self.op} {self.threshold:g}>"


class _Achieved(Requirement):
    def __init__(self, achievement_id: str) -> None:
        self.achievement_id = achievement_id

    def evaluate(self, state: GameState) -> bool:
        return state.has_achievement(self.achievement_id)

    def __repr__(self) -> str:
        return f"<achievement {self.achievement_id}>"


class _AnyOf(Requirement):
    def __init__(self, parts: tuple[Requirement, ...]) -> None:
        self.parts = parts

    def evaluate(self, state: GameState) -> bool:
        return any(p.evaluate(state) for p in self.parts)

    def __repr__(self) -> str:
        return " | ".join(repr(p) for p in self.parts)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for the built-in requirement types.

    Operators and metric names are checked when the requirement is built,
    so a typo in a table fails at import time rather than mid-game.
    """

    @staticmethod
    def metric(name: str, op: str, threshold: float) -> Requirement:
        if name not in METRIC_NAMES:
            raise ValueError(
                f"Unknown metric: {name!r}. Expected one of {list(METRIC_NAMES)}"
            )
        return _Threshold(name, lambda s: s.metric(name), op, threshold)

    @staticmethod
    def owns(upgrade_id: str) -> Requirement:
        return Req.count(upgrade_id, ">=", 1)

    @staticmethod
    def count(upgrade_id: str, op: str, threshold: int) -> Requirement:
        return _Threshold(
            f"owned[{upgrade_id}]", lambda s: s.owned_count(upgrade_id), op, threshold
        )

    @staticmethod
    def achievement(achievement_id: str) -> Requirement:
        return _Achieved(achievement_id)

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        if len(reqs) == 1:
            return reqs[0]
        return _AnyOf(reqs)
