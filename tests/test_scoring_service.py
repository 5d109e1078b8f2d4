"""Tests for the composite nutrition scoring service."""

import pytest

from nutrition_scoring.domain.additives import RiskTier
from nutrition_scoring.domain.nutrition import (
    NutritionFacts,
    ScoreCategory,
    ScoreColor,
)
from nutrition_scoring.services.scoring import (
    AdditivesImpact,
    ScoringError,
    generate_improvements,
    score_category,
    score_color,
    sentinel_scoring,
    weighted_score,
)
from tests.conftest import scenario_facts


def test_scores_high_sodium_snack(scoring_service) -> None:
    result = scoring_service.score(scenario_facts())

    assert result.breakdown.nutritional_quality == 90
    assert result.breakdown.additives_impact == 65
    assert result.breakdown.organic_bonus == 0
    assert result.final_score == 74
    assert result.category == ScoreCategory.GOOD
    assert result.color == ScoreColor.LIGHT_GREEN
    assert [item.code for item in result.additives] == ["E102", "E621", "Natural flavor"]


def test_improvements_for_high_sodium_snack(scoring_service) -> None:
    result = scoring_service.score(scenario_facts())

    assert result.improvements == [
        "Avoid products with Tartrazine (Yellow 5), Monosodium glutamate (MSG)",
        "Choose products with fewer artificial additives and preservatives",
        "Consider organic alternatives when available",
    ]


def test_worst_nutrient_profile_bottoms_out_at_60(scoring_service) -> None:
    facts = NutritionFacts(
        serving_size="100g", calories=500, saturated_fat=12, sugars=50, sodium=1000
    )

    result = scoring_service.score(facts)

    assert result.breakdown.nutritional_quality == 60
    assert result.improvements == ["Consider organic alternatives when available"]


def test_low_quality_adds_nutrient_advice() -> None:
    improvements = generate_improvements(
        50, AdditivesImpact(score=100, additives=[]), organic=100
    )

    assert improvements == [
        "Look for products with lower sugar, sodium, and saturated fat",
        "Choose products with higher fiber and protein content",
    ]


def test_empty_facts_score_clean(scoring_service) -> None:
    result = scoring_service.score(NutritionFacts())

    assert result.breakdown.nutritional_quality == 100
    assert result.breakdown.additives_impact == 100
    assert result.final_score == 90
    assert result.category == ScoreCategory.EXCELLENT
    assert result.additives == []
    assert result.improvements == ["Consider organic alternatives when available"]


def test_organic_certification_earns_bonus(scoring_service) -> None:
    facts = NutritionFacts(
        serving_size="50g",
        sodium=1200,
        ingredients="water, E102, E621, natural flavor",
        certifications=frozenset({"Organic"}),
    )

    result = scoring_service.score(facts)

    assert result.breakdown.organic_bonus == 100
    assert result.final_score == 84
    assert result.category == ScoreCategory.EXCELLENT
    assert "Consider organic alternatives when available" not in result.improvements


def test_weights_sum_to_full_score() -> None:
    assert weighted_score(100, 100, 100) == 100
    assert weighted_score(0, 0, 0) == 0
    assert weighted_score(100, 100, 0) == 90


def test_weighted_score_rounds_halves_up() -> None:
    assert weighted_score(0, 0, 5) == 1
    assert weighted_score(0, 5, 0) == 2


@pytest.mark.parametrize(
    ("final_score", "category", "color"),
    [
        (100, ScoreCategory.EXCELLENT, ScoreColor.GREEN),
        (80, ScoreCategory.EXCELLENT, ScoreColor.GREEN),
        (79, ScoreCategory.GOOD, ScoreColor.LIGHT_GREEN),
        (60, ScoreCategory.GOOD, ScoreColor.LIGHT_GREEN),
        (59, ScoreCategory.FAIR, ScoreColor.ORANGE),
        (40, ScoreCategory.FAIR, ScoreColor.ORANGE),
        (39, ScoreCategory.POOR, ScoreColor.RED),
        (0, ScoreCategory.POOR, ScoreColor.RED),
    ],
)
def test_category_thresholds(
    final_score: int, category: ScoreCategory, color: ScoreColor
) -> None:
    assert score_category(final_score) == category
    assert score_color(category) == color


def test_additive_penalty_is_clamped(scoring_service) -> None:
    facts = NutritionFacts(
        ingredients="E102, E110, E129, E133, E951, E954, E952",
    )

    result = scoring_service.score(facts)

    assert len(result.additives) == 7
    assert result.breakdown.additives_impact == 0
    assert all(item.risk_tier == RiskTier.RED for item in result.additives)


def test_red_additive_lowers_score_by_its_deduction(scoring_service) -> None:
    base = scoring_service.score(NutritionFacts(ingredients="oats, E330"))
    more = scoring_service.score(NutritionFacts(ingredients="oats, E330, E102"))

    assert base.breakdown.additives_impact - more.breakdown.additives_impact == 20
    assert more.final_score <= base.final_score


def test_ingredient_list_is_joined(scoring_service) -> None:
    facts = NutritionFacts(ingredients=("water", "E102", "E621"))

    result = scoring_service.score(facts)

    assert result.breakdown.additives_impact == 70


def test_malformed_facts_raise_scoring_error(scoring_service) -> None:
    facts = NutritionFacts(sodium="lots")  # type: ignore[arg-type]

    with pytest.raises(ScoringError) as excinfo:
        scoring_service.score(facts)

    assert isinstance(excinfo.value.__cause__, ValueError)


def test_sentinel_scoring_is_worst_case() -> None:
    sentinel = sentinel_scoring()

    assert sentinel.final_score == 0
    assert sentinel.category == ScoreCategory.POOR
    assert sentinel.color == ScoreColor.RED
    assert sentinel.improvements == ["Unable to calculate nutrition score"]


def test_analyze_ingredients(scoring_service) -> None:
    analysis = scoring_service.analyze_ingredients("water, E102, E621, natural flavor")

    assert analysis.additives_score == 65
    assert analysis.risk_assessment == "High risk additives present"
    assert analysis.recommendations == [
        "Choose products with fewer artificial additives and preservatives"
    ]


def test_analyze_clean_ingredients(scoring_service) -> None:
    analysis = scoring_service.analyze_ingredients("oats, water")

    assert analysis.additives == []
    assert analysis.additives_score == 100
    assert analysis.risk_assessment == "No concerning additives found"
    assert analysis.recommendations == []
