"""Additive reference table lookups."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Protocol

from nutrition_scoring.domain.additive_seed import SEED_ADDITIVES
from nutrition_scoring.domain.additives import AdditiveDefinition, RiskTier


class AdditiveTable(Protocol):
    """Read-only lookup interface over additive reference data."""

    def lookup_by_identifier(self, code: str) -> AdditiveDefinition | None:
        """Return the additive with this E-number, ignoring case."""

    def lookup_by_name_contains(self, text: str) -> AdditiveDefinition | None:
        """Return the first additive whose name contains ``text``, ignoring case."""

    def list_additives(self) -> list[AdditiveDefinition]:
        """Return every additive in table order."""


class AdditiveSource(Protocol):
    """Source of additive definitions loaded at startup."""

    def list_additives(self) -> list[AdditiveDefinition]:
        """Return all stored additive definitions."""


@dataclass(frozen=True)
class InMemoryAdditiveTable(AdditiveTable):
    """Additive table held in memory, indexed by E-number."""

    definitions: tuple[AdditiveDefinition, ...]
    _by_code: dict[str, AdditiveDefinition] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: dict[str, AdditiveDefinition] = {}
        for definition in self.definitions:
            if definition.point_deduction < 0:
                raise ValueError(f"Negative deduction for {definition.name}")
            if definition.e_number:
                index.setdefault(definition.e_number.casefold(), definition)
        object.__setattr__(self, "_by_code", index)

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[AdditiveDefinition],
        deductions: Mapping[RiskTier, int] | None = None,
    ) -> "InMemoryAdditiveTable":
        """Build a table, optionally re-pricing every entry by its tier."""
        items = tuple(definitions)
        if deductions is not None:
            items = tuple(
                replace(item, point_deduction=deductions[item.risk_tier])
                for item in items
            )
        return cls(items)

    @classmethod
    def from_seed(
        cls, deductions: Mapping[RiskTier, int] | None = None
    ) -> "InMemoryAdditiveTable":
        """Build a table from the bundled seed data."""
        return cls.from_definitions(SEED_ADDITIVES, deductions)

    @classmethod
    def load(
        cls,
        source: AdditiveSource,
        deductions: Mapping[RiskTier, int] | None = None,
    ) -> "InMemoryAdditiveTable":
        """Snapshot an external source into memory."""
        return cls.from_definitions(source.list_additives(), deductions)

    def lookup_by_identifier(self, code: str) -> AdditiveDefinition | None:
        """Return the additive with this E-number, ignoring case."""
        return self._by_code.get(code.strip().casefold())

    def lookup_by_name_contains(self, text: str) -> AdditiveDefinition | None:
        """Return the first additive whose name contains ``text``."""
        needle = text.strip().casefold()
        if not needle:
            return None
        for definition in self.definitions:
            if needle in definition.name.casefold():
                return definition
        return None

    def list_additives(self) -> list[AdditiveDefinition]:
        """Return every additive in table order."""
        return list(self.definitions)
