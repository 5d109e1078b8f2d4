"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrition_scoring.domain.additives import RiskTier

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    fdc_api_key: str = "DEMO_KEY"
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    open_food_facts_base_url: str = "https://world.openfoodfacts.org"
    open_food_facts_user_agent: str = "nutrition-scoring/0.1 (contact@example.com)"
    additive_deductions: str | None = None
    default_serving_grams: float = Field(default=30.0, gt=0)
    batch_max_items: int = 100
    batch_max_concurrency: int | None = None
    nutrition_debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Whether additive reference data should come from Supabase."""
        return bool(self.supabase_url and self.supabase_service_key)


def parse_risk_deductions(raw: str | None) -> dict[RiskTier, int] | None:
    """Parse a ``tier=points`` list such as ``green=0,yellow=5,orange=10,red=20``.

    Returns ``None`` when nothing is configured. All four tiers must be present
    and the points must be non-negative and strictly increasing with risk.
    """
    if raw is None or not raw.strip():
        return None
    deductions: dict[RiskTier, int] = {}
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        tier_name, sep, points = value.partition("=")
        if not sep:
            raise ValueError(f"Invalid deduction entry: {value!r}")
        try:
            tier = RiskTier(tier_name.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown risk tier: {tier_name.strip()!r}") from exc
        if not points.strip().isdigit():
            raise ValueError(f"Deduction for {tier} must be a non-negative integer")
        deductions[tier] = int(points.strip())

    missing = [tier for tier in RiskTier if tier not in deductions]
    if missing:
        raise ValueError(f"Missing deductions for tiers: {', '.join(missing)}")
    ordered = [deductions[tier] for tier in RiskTier]
    if any(low >= high for low, high in zip(ordered, ordered[1:], strict=False)):
        raise ValueError("Deductions must strictly increase with risk tier")
    return deductions
