"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_scoring.adapters.fdc_client import HttpxFdcClient
from nutrition_scoring.adapters.open_food_facts_client import (
    HttpxOpenFoodFactsClient,
)
from nutrition_scoring.adapters.supabase_additive_repository import (
    SupabaseAdditiveRepository,
)
from nutrition_scoring.config import Settings, parse_risk_deductions
from nutrition_scoring.services.additive_table import (
    AdditiveTable,
    InMemoryAdditiveTable,
)
from nutrition_scoring.services.additives import (
    AdditiveCatalogService,
    AdditiveExtractor,
)
from nutrition_scoring.services.batch import BatchScoringService
from nutrition_scoring.services.cache import TtlCache
from nutrition_scoring.services.nutrition_data import NutritionDataService
from nutrition_scoring.services.quality import NutritionalQualityCalculator
from nutrition_scoring.services.scoring import (
    AdditivesImpactCalculator,
    NutritionScoringService,
)

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    additive_table: AdditiveTable
    catalog_service: AdditiveCatalogService
    scoring_service: NutritionScoringService
    batch_service: BatchScoringService
    nutrition_data_service: NutritionDataService
    close_resources: Callable[[], Awaitable[None]]


def build_additive_table(settings: Settings) -> InMemoryAdditiveTable:
    """Load the additive reference table once, from Supabase or the seed data."""
    deductions = parse_risk_deductions(settings.additive_deductions)
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        table = InMemoryAdditiveTable.load(SupabaseAdditiveRepository(client), deductions)
        source = "supabase"
    else:
        table = InMemoryAdditiveTable.from_seed(deductions)
        source = "seed"
    _logger.info(
        "Loaded %s additives from %s", len(table.list_additives()), source
    )
    return table


def build_scoring_service(
    table: AdditiveTable, settings: Settings
) -> NutritionScoringService:
    """Create the scoring service around an additive table."""
    return NutritionScoringService(
        additives_calculator=AdditivesImpactCalculator(AdditiveExtractor(table)),
        quality_calculator=NutritionalQualityCalculator(
            default_serving_grams=settings.default_serving_grams
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    additive_table = build_additive_table(resolved_settings)
    scoring_service = build_scoring_service(additive_table, resolved_settings)
    batch_service = BatchScoringService(
        scoring_service=scoring_service,
        max_concurrency=resolved_settings.batch_max_concurrency,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.open_food_facts_base_url,
        user_agent=resolved_settings.open_food_facts_user_agent,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_data_service = NutritionDataService(
        off_client=off_client,
        fdc_client=fdc_client,
        cache=TtlCache(),
        debug=resolved_settings.nutrition_debug,
    )

    async def close_resources() -> None:
        await off_client.close()
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        additive_table=additive_table,
        catalog_service=AdditiveCatalogService(additive_table),
        scoring_service=scoring_service,
        batch_service=batch_service,
        nutrition_data_service=nutrition_data_service,
        close_resources=close_resources,
    )
