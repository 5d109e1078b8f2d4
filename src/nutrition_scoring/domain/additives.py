"""Food additive domain models."""

from dataclasses import dataclass, field
from enum import StrEnum


class RiskTier(StrEnum):
    """Additive risk tiers ordered from safest to most concerning."""

    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"

    @property
    def rank(self) -> int:
        """Position of the tier, 0 being the safest."""
        return list(RiskTier).index(self)


@dataclass(frozen=True)
class AdditiveDefinition:
    """Reference entry for a known additive."""

    e_number: str | None
    name: str
    risk_tier: RiskTier
    description: str
    point_deduction: int
    health_impacts: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DetectedAdditive:
    """An additive recognised in an ingredient list."""

    e_number: str | None
    name: str
    risk_tier: RiskTier
    description: str
    point_deduction: int

    @property
    def code(self) -> str:
        """E-number when known, otherwise the display name."""
        return self.e_number or self.name

    @classmethod
    def from_definition(cls, definition: AdditiveDefinition) -> "DetectedAdditive":
        """Build a detection result from a reference entry."""
        return cls(
            e_number=definition.e_number,
            name=definition.name,
            risk_tier=definition.risk_tier,
            description=definition.description,
            point_deduction=definition.point_deduction,
        )
