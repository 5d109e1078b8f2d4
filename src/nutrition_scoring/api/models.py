"""Pydantic models for nutrition API payloads."""

from typing import Annotated

from pydantic import BaseModel, Field

from nutrition_scoring.domain.nutrition import NutritionFacts

NonNegative = Annotated[float, Field(ge=0)]


class NutritionFactsPayload(BaseModel):
    """Nutrition facts as submitted by clients; omitted fields are unknown."""

    serving_size: str | None = None
    calories: NonNegative | None = None
    total_fat: NonNegative | None = None
    saturated_fat: NonNegative | None = None
    trans_fat: NonNegative | None = None
    cholesterol: NonNegative | None = None
    sodium: NonNegative | None = None
    total_carbs: NonNegative | None = None
    dietary_fiber: NonNegative | None = None
    sugars: NonNegative | None = None
    added_sugars: NonNegative | None = None
    protein: NonNegative | None = None
    vitamin_a: NonNegative | None = None
    vitamin_c: NonNegative | None = None
    vitamin_d: NonNegative | None = None
    calcium: NonNegative | None = None
    iron: NonNegative | None = None
    potassium: NonNegative | None = None
    ingredients: list[str] | str | None = None
    certifications: list[str] = Field(default_factory=list)

    def to_facts(self) -> NutritionFacts:
        """Convert to the immutable domain model."""
        data = self.model_dump(exclude={"ingredients", "certifications"})
        ingredients = self.ingredients
        if isinstance(ingredients, list):
            ingredients = tuple(ingredients)
        return NutritionFacts(
            **data,
            ingredients=ingredients,
            certifications=frozenset(self.certifications),
        )


class ScoreRequest(BaseModel):
    """Body of a single scoring request."""

    nutrition: NutritionFactsPayload


class BatchScoreRequest(BaseModel):
    """Body of a batch scoring request."""

    items: list[NutritionFactsPayload]


class AnalyzeIngredientsRequest(BaseModel):
    """Body of an ingredient analysis request."""

    ingredients: str = Field(min_length=1)
