from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class UpgradeCategory(Enum):
    PASSIVE = "passive"
    CLICK = "click"


class UnknownUpgradeError(KeyError):
    """Raised when an upgrade id is not part of the catalog."""


@dataclass(frozen=True)
class UpgradeDefinition:
    """Static definition of a purchasable upgrade."""

    id: str
    display_name: str = ""
    description: str = ""
    category: UpgradeCategory = UpgradeCategory.PASSIVE
    base_cost: float = 1.0
    cost_multiplier: float = 1.15
    effect_magnitude: float = 0.0

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)

    def cost_at(self, owned_count: int) -> float:
        """Cost = base_cost * cost_multiplier^owned_count."""
        return self.base_cost * self.cost_multiplier ** owned_count

    @property
    def effect_unit(self) -> str:
        return "/sec" if self.category is UpgradeCategory.PASSIVE else "/click"


@dataclass
class Catalog:
    """The fixed set of upgrades offered by a game."""

    upgrades: list[UpgradeDefinition] = field(default_factory=list)

    _upgrades_by_id: dict[str, UpgradeDefinition] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._upgrades_by_id = {u.id: u for u in self.upgrades}

    def __iter__(self):
        return iter(self.upgrades)

    def __len__(self) -> int:
        return len(self.upgrades)

    def __contains__(self, upgrade_id: object) -> bool:
        return upgrade_id in self._upgrades_by_id

    def get(self, upgrade_id: str) -> UpgradeDefinition | None:
        return self._upgrades_by_id.get(upgrade_id)

    def require(self, upgrade_id: str) -> UpgradeDefinition:
        udef = self._upgrades_by_id.get(upgrade_id)
        if udef is None:
            raise UnknownUpgradeError(upgrade_id)
        return udef

    def by_category(self, category: UpgradeCategory) -> list[UpgradeDefinition]:
        """Upgrades of one category, in display order."""
        return [u for u in self.upgrades if u.category is category]

    def validate(self) -> list[str]:
        """Check for common catalog errors. Returns list of error messages."""
        errors: list[str] = []

        seen: set[str] = set()
        for u in self.upgrades:
            if u.id in seen:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen.add(u.id)

        for u in self.upgrades:
            if u.base_cost <= 0:
                errors.append(f"Upgrade {u.id!r} has non-positive base_cost {u.base_cost}")
            if u.cost_multiplier <= 1:
                errors.append(
                    f"Upgrade {u.id!r} has cost_multiplier {u.cost_multiplier}, expected > 1"
                )
            if u.effect_magnitude < 0:
                errors.append(
                    f"Upgrade {u.id!r} has negative effect_magnitude {u.effect_magnitude}"
                )

        return errors


DEFAULT_UPGRADES: tuple[UpgradeDefinition, ...] = (
    # Passive upgrades
    UpgradeDefinition(
        "pickaxe", "Pickaxe", "Basic mining tool",
        UpgradeCategory.PASSIVE, 10.0, 1.15, 0.1,
    ),
    UpgradeDefinition(
        "shovel", "Shovel", "Dig faster",
        UpgradeCategory.PASSIVE, 50.0, 1.15, 0.5,
    ),
    UpgradeDefinition(
        "drill", "Drill", "Mechanical mining",
        UpgradeCategory.PASSIVE, 250.0, 1.15, 2.0,
    ),
    UpgradeDefinition(
        "excavator", "Excavator", "Heavy machinery",
        UpgradeCategory.PASSIVE, 1000.0, 1.15, 8.0,
    ),
    UpgradeDefinition(
        "mine_shaft", "Mine Shaft", "Deep mining operation",
        UpgradeCategory.PASSIVE, 5000.0, 1.15, 30.0,
    ),
    UpgradeDefinition(
        "gold_factory", "Gold Factory", "Automated gold production",
        UpgradeCategory.PASSIVE, 25000.0, 1.15, 100.0,
    ),
    # Click upgrades
    UpgradeDefinition(
        "strong_arms", "Strong Arms", "Better swinging",
        UpgradeCategory.CLICK, 25.0, 1.2, 1.0,
    ),
    UpgradeDefinition(
        "steel_tools", "Steel Tools", "Sharper equipment",
        UpgradeCategory.CLICK, 100.0, 1.2, 2.0,
    ),
    UpgradeDefinition(
        "power_gloves", "Power Gloves", "Enhanced grip",
        UpgradeCategory.CLICK, 500.0, 1.2, 5.0,
    ),
    UpgradeDefinition(
        "hydraulic_hammer", "Hydraulic Hammer", "Mechanized clicking",
        UpgradeCategory.CLICK, 2500.0, 1.2, 10.0,
    ),
    UpgradeDefinition(
        "diamond_drill_bit", "Diamond Drill Bit", "Ultimate mining power",
        UpgradeCategory.CLICK, 10000.0, 1.2, 25.0,
    ),
)


def default_catalog() -> Catalog:
    """The standard Terminal Gold Mine upgrade catalog."""
    return Catalog(list(DEFAULT_UPGRADES))
