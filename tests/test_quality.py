"""Tests for the nutritional quality sub-score."""

import math

import pytest

from nutrition_scoring.domain.nutrition import NutritionFacts
from nutrition_scoring.services.quality import (
    SODIUM_BANDS,
    NutritionalQualityCalculator,
    band_points,
    clamp_score,
    parse_serving_grams,
)


@pytest.mark.parametrize(
    ("text", "grams"),
    [
        ("50g", 50.0),
        ("30 grams", 30.0),
        ("2.5 oz (70g)", 70.0),
        (".5g", 0.5),
        ("1.5 oz (42g)", 42.0),
        ("1 cup", None),
        ("0g", None),
        (None, None),
        ("", None),
    ],
)
def test_parse_serving_grams(text: str | None, grams: float | None) -> None:
    assert parse_serving_grams(text) == grams


def test_band_points_uses_strict_thresholds() -> None:
    assert band_points(180, SODIUM_BANDS) == 0
    assert band_points(180.1, SODIUM_BANDS) == -2
    assert band_points(900, SODIUM_BANDS) == -8
    assert band_points(5000, SODIUM_BANDS) == -10


@pytest.mark.parametrize("serving_size", [None, "30g"])
def test_no_readings_is_neutral(serving_size: str | None) -> None:
    facts = NutritionFacts(serving_size=serving_size)

    assert NutritionalQualityCalculator().calculate(facts) == 100


def test_sodium_is_normalized_per_100g() -> None:
    facts = NutritionFacts(serving_size="50g", sodium=1200)

    assert NutritionalQualityCalculator().calculate(facts) == 90


@pytest.mark.parametrize("serving_size", [None, "1 cup", "0g"])
def test_unusable_serving_falls_back_to_30g(serving_size: str | None) -> None:
    facts = NutritionFacts(serving_size=serving_size, sodium=100)

    # 100 mg per 30 g is about 333 mg per 100 g.
    assert NutritionalQualityCalculator().calculate(facts) == 98


def test_fallback_serving_is_configurable() -> None:
    facts = NutritionFacts(sodium=100)

    assert NutritionalQualityCalculator(default_serving_grams=100).calculate(facts) == 100


def test_favourable_nutrients_offset_penalties() -> None:
    facts = NutritionFacts(
        serving_size="100g",
        calories=400,
        saturated_fat=11,
        dietary_fiber=5,
        protein=2,
    )

    assert NutritionalQualityCalculator().calculate(facts) == 100 - 10 - 10 + 5 + 1


def test_score_never_exceeds_100() -> None:
    facts = NutritionFacts(serving_size="100g", dietary_fiber=20, protein=30)

    assert NutritionalQualityCalculator().calculate(facts) == 100


def test_clamp_score_bounds() -> None:
    assert clamp_score(-15) == 0
    assert clamp_score(140) == 100
    assert clamp_score(55) == 55


@pytest.mark.parametrize("value", ["lots", -5, math.nan, math.inf, True])
def test_malformed_values_raise(value: object) -> None:
    facts = NutritionFacts(sodium=value)  # type: ignore[arg-type]

    with pytest.raises(ValueError):
        NutritionalQualityCalculator().calculate(facts)
