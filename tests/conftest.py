"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from nutrition_scoring.adapters.fdc_client import FdcClient
from nutrition_scoring.adapters.open_food_facts_client import OpenFoodFactsClient
from nutrition_scoring.config import Settings
from nutrition_scoring.containers import AppContainer, build_scoring_service
from nutrition_scoring.domain.nutrition import NutritionFacts
from nutrition_scoring.services.additive_table import InMemoryAdditiveTable
from nutrition_scoring.services.additives import AdditiveCatalogService
from nutrition_scoring.services.batch import BatchScoringService
from nutrition_scoring.services.cache import TtlCache
from nutrition_scoring.services.nutrition_data import NutritionDataService

OFF_PRODUCT: dict[str, object] = {
    "code": "012345678905",
    "product_name": "Cheesy Crackers",
    "ingredients_text": "enriched flour, palm oil, E102, E621, natural flavor",
    "labels_tags": ["en:vegetarian"],
    "nutriments": {
        "energy-kcal_100g": 480,
        "fat_100g": 22,
        "saturated-fat_100g": 9,
        "sugars_100g": 4,
        "sodium_100g": 0.95,
        "fiber_100g": 2,
        "proteins_100g": 9,
    },
}

FDC_FOOD: dict[str, object] = {
    "fdcId": 123456,
    "description": "Plain Rolled Oats",
    "brandOwner": "Acme Mills",
    "gtinUpc": "098765432109",
    "ingredients": "whole grain rolled oats",
    "foodNutrients": [
        {"nutrientId": 1008, "value": 375},
        {"nutrientId": 1004, "value": 6.2},
        {"nutrientId": 1258, "value": 1.1},
        {"nutrientId": 1093, "value": 0},
        {"nutrientId": 1079, "value": 10},
        {"nutrientId": 2000, "value": 1},
        {"nutrientId": 1003, "value": 13},
    ],
}


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with in-memory products."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {"012345678905": OFF_PRODUCT}
    )
    search_payload: dict[str, object] = field(
        default_factory=lambda: {"products": [OFF_PRODUCT]}
    )
    product_calls: int = 0
    search_calls: int = 0

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.product_calls += 1
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0}
        return {"status": 1, "product": product}

    async def search_products(
        self, terms: str, page_size: int = 10
    ) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [FDC_FOOD]}
    )
    queries: list[str] = field(default_factory=list)

    async def search_foods(
        self,
        query: str,
        page_size: int = 10,
        data_types: Sequence[str] = ("Branded",),
    ) -> dict[str, object]:
        self.queries.append(query)
        return self.search_payload


def scenario_facts() -> NutritionFacts:
    """High-sodium snack with two flagged additives and a natural flavor."""
    return NutritionFacts(
        serving_size="50g",
        sodium=1200,
        ingredients="water, E102, E621, natural flavor",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=None,
        supabase_service_key=None,
        fdc_api_key="fdc-key",
        batch_max_items=5,
    )


@pytest.fixture
def additive_table() -> InMemoryAdditiveTable:
    return InMemoryAdditiveTable.from_seed()


@pytest.fixture
def scoring_service(additive_table, settings):  # type: ignore[no-untyped-def]
    return build_scoring_service(additive_table, settings)


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings,
    additive_table: InMemoryAdditiveTable,
    off_client: FakeOpenFoodFactsClient,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    scoring_service = build_scoring_service(additive_table, settings)
    nutrition_data_service = NutritionDataService(
        off_client=off_client,
        fdc_client=fdc_client,
        cache=TtlCache(),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        additive_table=additive_table,
        catalog_service=AdditiveCatalogService(additive_table),
        scoring_service=scoring_service,
        batch_service=BatchScoringService(scoring_service),
        nutrition_data_service=nutrition_data_service,
        close_resources=close_resources,
    )
