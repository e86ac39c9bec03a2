# goldmine: Terminal Gold Mine idle game simulation core

from goldmine.requirement import Requirement, Req
from goldmine.catalog import (
    Catalog,
    UpgradeCategory,
    UpgradeDefinition,
    UnknownUpgradeError,
    DEFAULT_UPGRADES,
    default_catalog,
)
from goldmine.config import EngineConfig
from goldmine.state import GameState, UpgradeState, Tab
from goldmine.achievement import AchievementDef, ACHIEVEMENTS, evaluate_achievements
from goldmine.commands import (
    Command,
    Click,
    Purchase,
    Navigate,
    SwitchTab,
    ToggleHelp,
    Quit,
    Direction,
)
from goldmine.snapshot import GameSnapshot, UpgradeStatus, AchievementStatus
from goldmine.engine import SimulationEngine, PurchaseResult, PurchaseOutcome
from goldmine.loop import GameLoop, Presentation
from goldmine.strategy import Strategy, ClickProfile, GreedyCheapest, PriorityList
from goldmine.metrics import MetricsCollector
from goldmine.simulation import Simulation
from goldmine.report import SimulationReport, build_report
from goldmine.formatting import format_number, format_text_report

__all__ = [
    # Requirements
    "Requirement",
    "Req",
    # Catalog
    "Catalog",
    "UpgradeCategory",
    "UpgradeDefinition",
    "UnknownUpgradeError",
    "DEFAULT_UPGRADES",
    "default_catalog",
    # Config
    "EngineConfig",
    # State
    "GameState",
    "UpgradeState",
    "Tab",
    # Achievements
    "AchievementDef",
    "ACHIEVEMENTS",
    "evaluate_achievements",
    # Commands
    "Command",
    "Click",
    "Purchase",
    "Navigate",
    "SwitchTab",
    "ToggleHelp",
    "Quit",
    "Direction",
    # Snapshot
    "GameSnapshot",
    "UpgradeStatus",
    "AchievementStatus",
    # Engine
    "SimulationEngine",
    "PurchaseResult",
    "PurchaseOutcome",
    # Loop
    "GameLoop",
    "Presentation",
    # Autoplay
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "PriorityList",
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_number",
    "format_text_report",
]
