"""Composite nutrition scoring."""

import logging
from dataclasses import dataclass, field

from nutrition_scoring.domain.additives import DetectedAdditive, RiskTier
from nutrition_scoring.domain.nutrition import (
    NutritionFacts,
    NutritionScoring,
    ScoreBreakdown,
    ScoreCategory,
    ScoreColor,
)
from nutrition_scoring.services.additives import (
    AdditiveExtractor,
    IngredientAnalysis,
    risk_assessment,
)
from nutrition_scoring.services.quality import (
    MAX_SCORE,
    NutritionalQualityCalculator,
    clamp_score,
)

# Weights in percent; they must sum to 100.
QUALITY_WEIGHT = 60
ADDITIVES_WEIGHT = 30
ORGANIC_WEIGHT = 10

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
FAIR_THRESHOLD = 40

ORGANIC_CERTIFICATION = "organic"

_CATEGORY_COLORS = {
    ScoreCategory.EXCELLENT: ScoreColor.GREEN,
    ScoreCategory.GOOD: ScoreColor.LIGHT_GREEN,
    ScoreCategory.FAIR: ScoreColor.ORANGE,
    ScoreCategory.POOR: ScoreColor.RED,
}

_ADDITIVE_KEYWORDS = ("additive", "artificial")

_logger = logging.getLogger(__name__)


class ScoringError(Exception):
    """Raised when a product cannot be scored because its data is malformed."""


@dataclass(frozen=True)
class AdditivesImpact:
    """Additives sub-score and the additives behind it."""

    score: int
    additives: list[DetectedAdditive]


@dataclass
class AdditivesImpactCalculator:
    """Turns detected additives into a 0..100 sub-score."""

    extractor: AdditiveExtractor

    def calculate(self, facts: NutritionFacts) -> AdditivesImpact:
        """Subtract each detected additive's deduction from 100.

        Products without ingredient data are assumed clean.
        """
        if not facts.ingredients:
            return AdditivesImpact(score=MAX_SCORE, additives=[])
        additives = self.extractor.extract_additives(facts.ingredient_text())
        penalty = sum(additive.point_deduction for additive in additives)
        return AdditivesImpact(score=clamp_score(MAX_SCORE - penalty), additives=additives)


@dataclass
class OrganicBonusCalculator:
    """Awards the organic bonus from certification data.

    Callers that do not supply certifications get no bonus.
    """

    certification: str = ORGANIC_CERTIFICATION

    def calculate(self, facts: NutritionFacts) -> int:
        """Return 100 for certified organic products, otherwise 0."""
        certifications = {value.lower() for value in facts.certifications}
        return MAX_SCORE if self.certification in certifications else 0


def weighted_score(quality: int, additives: int, organic: int) -> int:
    """Combine sub-scores with the fixed weights, rounding halves up."""
    total = (
        quality * QUALITY_WEIGHT
        + additives * ADDITIVES_WEIGHT
        + organic * ORGANIC_WEIGHT
    )
    return clamp_score((total + 50) // 100)


def score_category(final_score: int) -> ScoreCategory:
    """Map a final score to its category."""
    if final_score >= EXCELLENT_THRESHOLD:
        return ScoreCategory.EXCELLENT
    if final_score >= GOOD_THRESHOLD:
        return ScoreCategory.GOOD
    if final_score >= FAIR_THRESHOLD:
        return ScoreCategory.FAIR
    return ScoreCategory.POOR


def score_color(category: ScoreCategory) -> ScoreColor:
    """Return the display color for a category."""
    return _CATEGORY_COLORS[category]


def generate_improvements(
    quality: int, impact: AdditivesImpact, organic: int
) -> list[str]:
    """Build suggestions; every applicable rule contributes."""
    improvements: list[str] = []
    if quality < GOOD_THRESHOLD:
        improvements.append(
            "Look for products with lower sugar, sodium, and saturated fat"
        )
        improvements.append("Choose products with higher fiber and protein content")

    if impact.score < EXCELLENT_THRESHOLD:
        concerning = [
            additive.name
            for additive in impact.additives
            if additive.risk_tier in {RiskTier.RED, RiskTier.ORANGE}
        ]
        if concerning:
            improvements.append(f"Avoid products with {', '.join(concerning)}")
        improvements.append(
            "Choose products with fewer artificial additives and preservatives"
        )

    if organic == 0:
        improvements.append("Consider organic alternatives when available")
    return improvements


def sentinel_scoring() -> NutritionScoring:
    """Worst-case placeholder used when a product could not be scored."""
    return NutritionScoring(
        final_score=0,
        category=ScoreCategory.POOR,
        color=ScoreColor.RED,
        breakdown=ScoreBreakdown(
            nutritional_quality=0, additives_impact=0, organic_bonus=0
        ),
        additives=[],
        improvements=["Unable to calculate nutrition score"],
    )


@dataclass
class NutritionScoringService:
    """Scores products: 60% quality, 30% additives, 10% organic."""

    additives_calculator: AdditivesImpactCalculator
    quality_calculator: NutritionalQualityCalculator = field(
        default_factory=NutritionalQualityCalculator
    )
    organic_calculator: OrganicBonusCalculator = field(
        default_factory=OrganicBonusCalculator
    )

    def score(self, facts: NutritionFacts) -> NutritionScoring:
        """Score a single product.

        Raises:
            ScoringError: if any calculator fails on malformed input.
        """
        try:
            quality = self.quality_calculator.calculate(facts)
            impact = self.additives_calculator.calculate(facts)
            organic = self.organic_calculator.calculate(facts)
        except Exception as exc:
            _logger.exception("Error calculating nutrition score")
            raise ScoringError("Failed to calculate nutrition score") from exc

        final_score = weighted_score(quality, impact.score, organic)
        category = score_category(final_score)
        return NutritionScoring(
            final_score=final_score,
            category=category,
            color=score_color(category),
            breakdown=ScoreBreakdown(
                nutritional_quality=quality,
                additives_impact=impact.score,
                organic_bonus=organic,
            ),
            additives=impact.additives,
            improvements=generate_improvements(quality, impact, organic),
        )

    def analyze_ingredients(self, ingredients: str) -> IngredientAnalysis:
        """Report additives and additive-related advice for raw ingredients."""
        scoring = self.score(NutritionFacts(ingredients=ingredients))
        recommendations = [
            text
            for text in scoring.improvements
            if any(keyword in text.lower() for keyword in _ADDITIVE_KEYWORDS)
        ]
        return IngredientAnalysis(
            additives=scoring.additives,
            additives_score=scoring.breakdown.additives_impact,
            risk_assessment=risk_assessment(scoring.additives),
            recommendations=recommendations,
        )
