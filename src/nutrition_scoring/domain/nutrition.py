"""Nutrition facts and scoring result models."""

from dataclasses import dataclass, field
from enum import StrEnum

from nutrition_scoring.domain.additives import DetectedAdditive


@dataclass(frozen=True)
class NutritionFacts:
    """Per-serving nutrient readings for a product.

    Every nutrient is optional; ``None`` means unknown, not zero. Values are
    in the provider's native unit: kcal for calories, mg for sodium,
    cholesterol and minerals, g for the macronutrients.
    """

    serving_size: str | None = None
    calories: float | None = None
    total_fat: float | None = None
    saturated_fat: float | None = None
    trans_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    total_carbs: float | None = None
    dietary_fiber: float | None = None
    sugars: float | None = None
    added_sugars: float | None = None
    protein: float | None = None
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    vitamin_d: float | None = None
    calcium: float | None = None
    iron: float | None = None
    potassium: float | None = None
    ingredients: tuple[str, ...] | str | None = None
    certifications: frozenset[str] = field(default_factory=frozenset)

    def ingredient_text(self) -> str:
        """Return the ingredient list as a single comma-joined string."""
        if self.ingredients is None:
            return ""
        if isinstance(self.ingredients, str):
            return self.ingredients
        return ", ".join(self.ingredients)


class ScoreCategory(StrEnum):
    """Consumer-facing score buckets."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ScoreColor(StrEnum):
    """Display colors, one per category."""

    GREEN = "green"
    LIGHT_GREEN = "light-green"
    ORANGE = "orange"
    RED = "red"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-scores that make up a final score."""

    nutritional_quality: int
    additives_impact: int
    organic_bonus: int


@dataclass(frozen=True)
class NutritionScoring:
    """Result of scoring a single product."""

    final_score: int
    category: ScoreCategory
    color: ScoreColor
    breakdown: ScoreBreakdown
    additives: list[DetectedAdditive]
    improvements: list[str]
