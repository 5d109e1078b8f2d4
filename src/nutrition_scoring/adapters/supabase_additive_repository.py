"""Supabase storage for additive reference data."""

from collections.abc import Sequence
from dataclasses import dataclass

from supabase import Client

from nutrition_scoring.domain.additives import AdditiveDefinition, RiskTier
from nutrition_scoring.services.additive_table import AdditiveSource

_TABLE = "additives"


@dataclass
class SupabaseAdditiveRepository(AdditiveSource):
    """Supabase-backed repository for the ``additives`` table."""

    client: Client

    def list_additives(self) -> list[AdditiveDefinition]:
        """Return all additive rows ordered by id."""
        response = self.client.table(_TABLE).select("*").order("id").execute()
        return [_parse_additive(row) for row in response.data or []]

    def replace_all(self, definitions: Sequence[AdditiveDefinition]) -> int:
        """Delete existing rows and insert ``definitions``; return rows written."""
        self.client.table(_TABLE).delete().neq("name", "").execute()
        response = (
            self.client.table(_TABLE)
            .insert([_serialize_additive(item) for item in definitions])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to seed additives")
        return len(response.data)


def _serialize_additive(definition: AdditiveDefinition) -> dict[str, object]:
    return {
        "e_number": definition.e_number,
        "name": definition.name,
        "risk_level": definition.risk_tier.value,
        "description": definition.description,
        "point_deduction": definition.point_deduction,
        "health_impacts": list(definition.health_impacts),
    }


def _parse_additive(row: dict[str, object]) -> AdditiveDefinition:
    """Parse an additive row into a domain model."""
    impacts = row.get("health_impacts") or []
    return AdditiveDefinition(
        e_number=row.get("e_number") or None,
        name=str(row.get("name", "")),
        risk_tier=RiskTier(str(row.get("risk_level", "")).lower()),
        description=str(row.get("description") or ""),
        point_deduction=int(row.get("point_deduction", 0)),
        health_impacts=tuple(str(item) for item in impacts),
    )
