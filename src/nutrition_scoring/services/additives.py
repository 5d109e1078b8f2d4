"""Additive detection in ingredient lists and catalog queries."""

import re
from dataclasses import dataclass

from nutrition_scoring.domain.additives import (
    AdditiveDefinition,
    DetectedAdditive,
    RiskTier,
)
from nutrition_scoring.services.additive_table import AdditiveTable

E_NUMBER_PATTERN = re.compile(r"E\d{3}[a-z]?(?!\d)", re.IGNORECASE)

# Additives that often appear by name rather than by E-number.
COMMON_ADDITIVE_NAMES: tuple[str, ...] = (
    "sodium benzoate",
    "potassium sorbate",
    "citric acid",
    "ascorbic acid",
    "tocopherols",
    "lecithin",
    "carrageenan",
    "xanthan gum",
    "guar gum",
    "sodium nitrite",
    "sodium nitrate",
    "monosodium glutamate",
    "msg",
    "high fructose corn syrup",
    "artificial flavor",
    "natural flavor",
    "artificial color",
    "red 40",
    "yellow 5",
    "blue 1",
    "caramel color",
    "partially hydrogenated",
    "sodium phosphate",
    "phosphoric acid",
)


@dataclass
class AdditiveExtractor:
    """Finds known additives in free-text ingredient lists.

    Two passes run over the same text. The first matches E-number codes and
    resolves them by identifier; the second searches for common additive
    names and resolves them by name. Matches missing from the reference
    table are skipped, and each resolved additive is reported once.
    """

    table: AdditiveTable
    names: tuple[str, ...] = COMMON_ADDITIVE_NAMES

    def extract_additives(self, text: str) -> list[DetectedAdditive]:
        """Return additives found in ``text`` in detection order."""
        found: list[DetectedAdditive] = []
        seen: set[str] = set()

        for match in E_NUMBER_PATTERN.finditer(text):
            definition = self.table.lookup_by_identifier(match.group(0).upper())
            _append_unique(found, seen, definition)

        lowered = text.lower()
        for name in self.names:
            if name.lower() not in lowered:
                continue
            definition = self.table.lookup_by_name_contains(name)
            _append_unique(found, seen, definition)

        return found


def _append_unique(
    found: list[DetectedAdditive],
    seen: set[str],
    definition: AdditiveDefinition | None,
) -> None:
    if definition is None:
        return
    key = definition.name.casefold()
    if key in seen:
        return
    seen.add(key)
    found.append(DetectedAdditive.from_definition(definition))


@dataclass(frozen=True)
class IngredientAnalysis:
    """Additive report for a raw ingredient string."""

    additives: list[DetectedAdditive]
    additives_score: int
    risk_assessment: str
    recommendations: list[str]


def risk_assessment(additives: list[DetectedAdditive]) -> str:
    """Summarise the worst risk tier among detected additives."""
    if not additives:
        return "No concerning additives found"
    tiers = {additive.risk_tier for additive in additives}
    if RiskTier.RED in tiers:
        return "High risk additives present"
    if RiskTier.ORANGE in tiers:
        return "Moderate risk additives present"
    return "Low risk additives only"


@dataclass
class AdditiveCatalogService:
    """Read-only queries over the additive reference table."""

    table: AdditiveTable

    def list_additives(
        self, risk_level: RiskTier | None = None, search: str | None = None
    ) -> list[AdditiveDefinition]:
        """Filter additives by tier and free-text search, riskiest first."""
        items = self.table.list_additives()
        if risk_level is not None:
            items = [item for item in items if item.risk_tier == risk_level]
        if search:
            needle = search.casefold()
            items = [
                item
                for item in items
                if needle in item.name.casefold()
                or needle in (item.e_number or "").casefold()
                or needle in item.description.casefold()
            ]
        return sorted(
            items,
            key=lambda item: (
                -item.risk_tier.rank,
                -item.point_deduction,
                item.name.casefold(),
            ),
        )

    @staticmethod
    def summary(items: list[AdditiveDefinition]) -> dict[RiskTier, int]:
        """Count additives per risk tier, omitting empty tiers."""
        counts: dict[RiskTier, int] = {}
        for item in items:
            counts[item.risk_tier] = counts.get(item.risk_tier, 0) + 1
        return counts

    def get_additive(self, code: str) -> AdditiveDefinition | None:
        """Find an additive by E-number or exact name."""
        by_code = self.table.lookup_by_identifier(code)
        if by_code is not None:
            return by_code
        wanted = code.strip().casefold()
        for item in self.table.list_additives():
            if item.name.casefold() == wanted:
                return item
        return None
