"""Seed the Supabase additives table from the bundled reference data."""

import logging

from supabase import create_client

from nutrition_scoring.adapters.supabase_additive_repository import (
    SupabaseAdditiveRepository,
)
from nutrition_scoring.app_logging import configure_logging
from nutrition_scoring.config import Settings
from nutrition_scoring.domain.additive_seed import SEED_ADDITIVES
from nutrition_scoring.services.additives import AdditiveCatalogService

_logger = logging.getLogger(__name__)


def seed_additives(repository: SupabaseAdditiveRepository) -> int:
    """Replace stored additives with the seed data and log a tier summary."""
    written = repository.replace_all(SEED_ADDITIVES)
    _logger.info("Seeded %s additives", written)
    for tier, count in AdditiveCatalogService.summary(list(SEED_ADDITIVES)).items():
        _logger.info("  %s: %s additives", tier.value, count)
    return written


def main() -> None:
    """Console entrypoint."""
    configure_logging()
    settings = Settings()
    if not settings.uses_supabase:
        raise SystemExit("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    seed_additives(SupabaseAdditiveRepository(client))


if __name__ == "__main__":
    main()
