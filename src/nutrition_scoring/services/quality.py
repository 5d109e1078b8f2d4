"""Nutritional quality sub-score.

Nutrient readings are normalized to a per-100 g basis and compared against
five-band tables adapted from Nutri-Score. Unfavourable nutrients subtract
points from a starting score of 100, favourable ones add points back, and the
result is clamped to 0..100.

Serving sizes without a usable gram quantity fall back to an assumed serving
(30 g by default). This is an approximation: products with large or tiny
servings described only in volume or pieces will be scaled as if they
weighed 30 g.
"""

import math
import re
from dataclasses import dataclass

from nutrition_scoring.domain.nutrition import NutritionFacts

DEFAULT_SERVING_GRAMS = 30.0
MAX_SCORE = 100
MIN_SCORE = 0

_GRAMS_PATTERN = re.compile(
    r"(?<![\d.])(\d+(?:\.\d+)?|\.\d+)\s*(?:grams?|gr|g)\b", re.IGNORECASE
)

# (threshold per 100 g, points); the first threshold exceeded wins.
Bands = tuple[tuple[float, int], ...]

CALORIE_BANDS: Bands = ((335, -10), (270, -8), (225, -6), (180, -4), (135, -2))
SATURATED_FAT_BANDS: Bands = ((10, -10), (8, -8), (6, -6), (4, -4), (2, -2))
SUGAR_BANDS: Bands = ((45, -10), (36, -8), (27, -6), (18, -4), (9, -2))
SODIUM_BANDS: Bands = ((900, -10), (720, -8), (540, -6), (360, -4), (180, -2))
FIBER_BANDS: Bands = ((4.7, 5), (3.7, 4), (2.8, 3), (1.9, 2), (0.9, 1))
PROTEIN_BANDS: Bands = ((8, 5), (6.4, 4), (4.8, 3), (3.2, 2), (1.6, 1))

NUTRIENT_BANDS: tuple[tuple[str, Bands], ...] = (
    ("calories", CALORIE_BANDS),
    ("saturated_fat", SATURATED_FAT_BANDS),
    ("sugars", SUGAR_BANDS),
    ("sodium", SODIUM_BANDS),
    ("dietary_fiber", FIBER_BANDS),
    ("protein", PROTEIN_BANDS),
)


def clamp_score(value: int) -> int:
    """Clamp a score to the 0..100 range."""
    return max(MIN_SCORE, min(MAX_SCORE, value))


def parse_serving_grams(serving_size: str | None) -> float | None:
    """Extract a positive gram quantity from serving size text."""
    if not serving_size:
        return None
    match = _GRAMS_PATTERN.search(serving_size)
    if match is None:
        return None
    grams = float(match.group(1))
    return grams if grams > 0 else None


def band_points(value: float, bands: Bands) -> int:
    """Return the points of the first band whose threshold ``value`` exceeds."""
    for threshold, points in bands:
        if value > threshold:
            return points
    return 0


@dataclass
class NutritionalQualityCalculator:
    """Computes the nutritional quality sub-score from nutrient readings."""

    default_serving_grams: float = DEFAULT_SERVING_GRAMS

    def calculate(self, facts: NutritionFacts) -> int:
        """Return the quality sub-score in 0..100."""
        grams = parse_serving_grams(facts.serving_size) or self.default_serving_grams
        score = MAX_SCORE
        for field_name, bands in NUTRIENT_BANDS:
            value = getattr(facts, field_name)
            if value is None:
                continue
            score += band_points(_per_100g(field_name, value, grams), bands)
        return clamp_score(score)


def _per_100g(field_name: str, value: object, grams: float) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{field_name} must be finite and non-negative")
    return value * 100 / grams
