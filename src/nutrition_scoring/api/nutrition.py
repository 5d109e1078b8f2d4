"""Nutrition scoring and additive endpoints."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from nutrition_scoring.api.models import (
    AnalyzeIngredientsRequest,
    BatchScoreRequest,
    ScoreRequest,
)
from nutrition_scoring.domain.additives import RiskTier  # noqa: TC001
from nutrition_scoring.services.scoring import ScoringError

if TYPE_CHECKING:
    from nutrition_scoring.containers import AppContainer
    from nutrition_scoring.domain.additives import (
        AdditiveDefinition,
        DetectedAdditive,
    )
    from nutrition_scoring.domain.nutrition import NutritionFacts, NutritionScoring

router = APIRouter(prefix="/nutrition", tags=["nutrition"])

_UPC_PATTERN = re.compile(r"^\d{12,14}$")
MAX_SEARCH_LIMIT = 50


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/score")
async def score(body: ScoreRequest, request: Request) -> dict[str, object]:
    """Score one product's nutrition facts."""
    container = _container(request)
    try:
        scoring = container.scoring_service.score(body.nutrition.to_facts())
    except ScoringError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return scoring_payload(scoring)


@router.post("/batch-score")
async def batch_score(body: BatchScoreRequest, request: Request) -> dict[str, object]:
    """Score many products; failures come back as worst-case scores."""
    container = _container(request)
    max_items = container.settings.batch_max_items
    if len(body.items) > max_items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot process more than {max_items} items at once",
        )
    scores = await container.batch_service.score_all(
        [item.to_facts() for item in body.items]
    )
    return {"scores": [scoring_payload(item) for item in scores], "count": len(scores)}


@router.post("/analyze-ingredients")
async def analyze_ingredients(
    body: AnalyzeIngredientsRequest, request: Request
) -> dict[str, object]:
    """Detect additives in an ingredient string."""
    container = _container(request)
    try:
        analysis = container.scoring_service.analyze_ingredients(body.ingredients)
    except ScoringError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {
        "additives": [detected_payload(item) for item in analysis.additives],
        "additives_score": analysis.additives_score,
        "risk_assessment": analysis.risk_assessment,
        "recommendations": analysis.recommendations,
    }


@router.get("/additives")
async def list_additives(
    request: Request,
    risk_level: RiskTier | None = None,
    search: str | None = None,
) -> dict[str, object]:
    """List reference additives with a per-tier summary."""
    catalog = _container(request).catalog_service
    additives = catalog.list_additives(risk_level=risk_level, search=search)
    return {
        "additives": [definition_payload(item) for item in additives],
        "summary": [
            {"risk_level": tier.value, "count": count}
            for tier, count in catalog.summary(additives).items()
        ],
        "total": len(additives),
    }


@router.get("/additives/{code}")
async def get_additive(code: str, request: Request) -> dict[str, object]:
    """Return one additive by E-number or name."""
    additive = _container(request).catalog_service.get_additive(code)
    if additive is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Additive not found"
        )
    return definition_payload(additive)


@router.get("/barcode/{upc}")
async def barcode(upc: str, request: Request) -> dict[str, object]:
    """Look up a product by barcode and score it."""
    if not _UPC_PATTERN.match(upc):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid UPC/barcode is required",
        )
    container = _container(request)
    facts = await container.nutrition_data_service.get_by_barcode(upc)
    if facts is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nutrition data not found for this product",
        )
    try:
        scoring = container.scoring_service.score(facts)
    except ScoringError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {
        "upc": upc,
        "nutrition": facts_payload(facts),
        "scoring": scoring_payload(scoring),
    }


@router.get("/search")
async def search(
    request: Request, q: str = "", brand: str | None = None, limit: int = 10
) -> dict[str, object]:
    """Search providers by product name and score each hit."""
    query = q.strip()
    if len(query) < 2:  # noqa: PLR2004
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query must be at least 2 characters",
        )
    container = _container(request)
    found = await container.nutrition_data_service.search(query, brand)
    limited = found[: max(1, min(limit, MAX_SEARCH_LIMIT))]
    results: list[dict[str, object]] = []
    for facts in limited:
        try:
            scoring: dict[str, object] | None = scoring_payload(
                container.scoring_service.score(facts)
            )
        except ScoringError:
            scoring = None
        results.append({"nutrition": facts_payload(facts), "scoring": scoring})
    return {
        "results": results,
        "query": query,
        "brand": brand,
        "count": len(results),
        "total_found": len(found),
    }


def detected_payload(additive: DetectedAdditive) -> dict[str, object]:
    """Serialize a detected additive."""
    return {
        "code": additive.code,
        "name": additive.name,
        "risk_level": additive.risk_tier.value,
        "description": additive.description,
        "point_deduction": additive.point_deduction,
    }


def definition_payload(additive: AdditiveDefinition) -> dict[str, object]:
    """Serialize a reference additive."""
    return {
        "e_number": additive.e_number,
        "name": additive.name,
        "risk_level": additive.risk_tier.value,
        "description": additive.description,
        "point_deduction": additive.point_deduction,
        "health_impacts": list(additive.health_impacts),
    }


def scoring_payload(scoring: NutritionScoring) -> dict[str, object]:
    """Serialize a scoring result."""
    return {
        "final_score": scoring.final_score,
        "category": scoring.category.value,
        "color": scoring.color.value,
        "breakdown": {
            "nutritional_quality": scoring.breakdown.nutritional_quality,
            "additives_impact": scoring.breakdown.additives_impact,
            "organic_bonus": scoring.breakdown.organic_bonus,
        },
        "additives": [detected_payload(item) for item in scoring.additives],
        "improvements": list(scoring.improvements),
    }


def facts_payload(facts: NutritionFacts) -> dict[str, object]:
    """Serialize nutrition facts for responses."""
    ingredients = facts.ingredients
    return {
        "serving_size": facts.serving_size,
        "calories": facts.calories,
        "total_fat": facts.total_fat,
        "saturated_fat": facts.saturated_fat,
        "trans_fat": facts.trans_fat,
        "cholesterol": facts.cholesterol,
        "sodium": facts.sodium,
        "total_carbs": facts.total_carbs,
        "dietary_fiber": facts.dietary_fiber,
        "sugars": facts.sugars,
        "added_sugars": facts.added_sugars,
        "protein": facts.protein,
        "vitamin_a": facts.vitamin_a,
        "vitamin_c": facts.vitamin_c,
        "vitamin_d": facts.vitamin_d,
        "calcium": facts.calcium,
        "iron": facts.iron,
        "potassium": facts.potassium,
        "ingredients": (
            list(ingredients) if isinstance(ingredients, tuple) else ingredients
        ),
        "certifications": sorted(facts.certifications),
    }
