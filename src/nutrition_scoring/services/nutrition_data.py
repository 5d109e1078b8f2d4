"""Nutrition facts enrichment from Open Food Facts and USDA FDC."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from nutrition_scoring.adapters.fdc_client import FdcClient
from nutrition_scoring.adapters.open_food_facts_client import OpenFoodFactsClient
from nutrition_scoring.domain.nutrition import NutritionFacts
from nutrition_scoring.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

# Provider values are per 100 g, so normalization becomes the identity.
PER_100G_SERVING = "100g"
ORGANIC_LABELS = {"en:organic", "en:usda-organic", "en:eu-organic"}

# Open Food Facts reports minerals and vitamins in grams; scale to mg and µg.
_OFF_NUTRIMENTS: dict[str, tuple[str, float]] = {
    "calories": ("energy-kcal", 1),
    "total_fat": ("fat", 1),
    "saturated_fat": ("saturated-fat", 1),
    "trans_fat": ("trans-fat", 1),
    "cholesterol": ("cholesterol", 1000),
    "sodium": ("sodium", 1000),
    "total_carbs": ("carbohydrates", 1),
    "dietary_fiber": ("fiber", 1),
    "sugars": ("sugars", 1),
    "added_sugars": ("added-sugars", 1),
    "protein": ("proteins", 1),
    "vitamin_a": ("vitamin-a", 1_000_000),
    "vitamin_c": ("vitamin-c", 1000),
    "vitamin_d": ("vitamin-d", 1_000_000),
    "calcium": ("calcium", 1000),
    "iron": ("iron", 1000),
    "potassium": ("potassium", 1000),
}

_FDC_NUTRIENT_IDS: dict[int, str] = {
    1008: "calories",
    1004: "total_fat",
    1258: "saturated_fat",
    1257: "trans_fat",
    1253: "cholesterol",
    1093: "sodium",
    1005: "total_carbs",
    1079: "dietary_fiber",
    2000: "sugars",
    1235: "added_sugars",
    1003: "protein",
    1106: "vitamin_a",
    1162: "vitamin_c",
    1114: "vitamin_d",
    1087: "calcium",
    1089: "iron",
    1092: "potassium",
}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionDataService:
    """Builds ``NutritionFacts`` from external nutrition providers."""

    off_client: OpenFoodFactsClient
    fdc_client: FdcClient
    cache: Cache
    barcode_ttl_seconds: int = 7 * 24 * 60 * 60
    search_ttl_seconds: int = 60 * 60
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def get_by_barcode(self, upc: str) -> NutritionFacts | None:
        """Look up a product by barcode, Open Food Facts first."""
        cache_key = f"nutrition:upc:{upc}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, NutritionFacts):
            return cached

        facts = await self._open_food_facts_product(upc)
        if facts is None:
            foods = await self._fdc_search(upc, page_size=1)
            facts = foods[0] if foods else None

        if facts is not None:
            self.cache.set(cache_key, facts, ttl_seconds=self.barcode_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition barcode lookup: upc=%s found=%s", upc, bool(facts))
        return facts

    async def search(self, name: str, brand: str | None = None) -> list[NutritionFacts]:
        """Search both providers and drop near-identical results."""
        cache_key = f"nutrition:search:{name.lower()}:{(brand or '').lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        terms = f"{brand} {name}" if brand else name
        off_results, fdc_results = await asyncio.gather(
            self._open_food_facts_search(terms), self._fdc_search(terms, page_size=10)
        )
        results = deduplicate(off_results + fdc_results)
        if results:
            self.cache.set(cache_key, results, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition search: terms=%s results=%s", terms, len(results))
        return results

    async def _open_food_facts_product(self, upc: str) -> NutritionFacts | None:
        try:
            payload = await self._call_with_retry(
                lambda: self.off_client.get_product(upc), action=f"off_product:{upc}"
            )
        except httpx.HTTPError as exc:
            _logger.warning("Open Food Facts lookup failed for %s: %s", upc, exc)
            return None
        product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(product, dict):
            return None
        return map_open_food_facts(product)

    async def _open_food_facts_search(self, terms: str) -> list[NutritionFacts]:
        try:
            payload = await self._call_with_retry(
                lambda: self.off_client.search_products(terms), action="off_search"
            )
        except httpx.HTTPError as exc:
            _logger.warning("Open Food Facts search failed for %r: %s", terms, exc)
            return []
        products = payload.get("products") or []
        return [map_open_food_facts(product) for product in products]

    async def _fdc_search(self, query: str, page_size: int) -> list[NutritionFacts]:
        try:
            payload = await self._call_with_retry(
                lambda: self.fdc_client.search_foods(query, page_size=page_size),
                action="fdc_search",
            )
        except httpx.HTTPError as exc:
            _logger.warning("USDA search failed for %r: %s", query, exc)
            return []
        foods = payload.get("foods") or []
        return [map_fdc_food(food) for food in foods]

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except httpx.HTTPError as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        _status_code_from_exception(exc),
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) and number >= 0 else None


def map_open_food_facts(product: dict[str, object]) -> NutritionFacts:
    """Map an Open Food Facts product to per-100 g nutrition facts."""
    nutriments = product.get("nutriments") or {}
    values: dict[str, float | None] = {}
    for field_name, (key, factor) in _OFF_NUTRIMENTS.items():
        amount = _number(nutriments.get(f"{key}_100g"))
        values[field_name] = amount * factor if amount is not None else None

    ingredients_text = product.get("ingredients_text")
    labels = {str(label).lower() for label in product.get("labels_tags") or []}
    return NutritionFacts(
        serving_size=PER_100G_SERVING,
        ingredients=_split_ingredients(ingredients_text),
        certifications=frozenset({"organic"} if labels & ORGANIC_LABELS else ()),
        **values,
    )


def map_fdc_food(food: dict[str, object]) -> NutritionFacts:
    """Map an FDC search hit to per-100 g nutrition facts."""
    values: dict[str, float | None] = {}
    for nutrient in food.get("foodNutrients") or []:
        field_name = _FDC_NUTRIENT_IDS.get(nutrient.get("nutrientId"))
        if field_name is not None:
            values[field_name] = _number(nutrient.get("value"))
    return NutritionFacts(
        serving_size=PER_100G_SERVING,
        ingredients=_split_ingredients(food.get("ingredients")),
        **values,
    )


def _split_ingredients(text: object) -> tuple[str, ...] | None:
    if not isinstance(text, str) or not text.strip():
        return None
    return tuple(part.strip() for part in text.split(",") if part.strip())


def deduplicate(results: list[NutritionFacts]) -> list[NutritionFacts]:
    """Drop results sharing calories, fat, protein and sodium."""
    seen: set[tuple[float | None, ...]] = set()
    unique: list[NutritionFacts] = []
    for facts in results:
        key = (facts.calories, facts.total_fat, facts.protein, facts.sodium)
        if key in seen:
            continue
        seen.add(key)
        unique.append(facts)
    return unique

