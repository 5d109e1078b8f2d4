"""Concurrent scoring of many products."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from nutrition_scoring.domain.nutrition import NutritionFacts, NutritionScoring
from nutrition_scoring.services.scoring import NutritionScoringService, sentinel_scoring

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredItem:
    """A batch item that was scored."""

    index: int
    scoring: NutritionScoring


@dataclass(frozen=True)
class FailedItem:
    """A batch item whose scoring raised."""

    index: int
    error: BaseException


BatchOutcome = ScoredItem | FailedItem


@dataclass
class BatchScoringService:
    """Scores products concurrently, isolating per-item failures."""

    scoring_service: NutritionScoringService
    max_concurrency: int | None = None

    async def score_all(
        self, facts_list: Sequence[NutritionFacts]
    ) -> list[NutritionScoring]:
        """Score every item; failed items become the sentinel poor score."""
        outcomes = await self.score_outcomes(facts_list)
        results: list[NutritionScoring] = []
        for outcome in outcomes:
            if isinstance(outcome, ScoredItem):
                results.append(outcome.scoring)
            else:
                results.append(sentinel_scoring())
        return results

    async def score_outcomes(
        self, facts_list: Sequence[NutritionFacts]
    ) -> list[BatchOutcome]:
        """Score every item and report each one as scored or failed."""
        semaphore = (
            asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        )

        async def run(facts: NutritionFacts) -> NutritionScoring:
            if semaphore is None:
                return await asyncio.to_thread(self.scoring_service.score, facts)
            async with semaphore:
                return await asyncio.to_thread(self.scoring_service.score, facts)

        settled = await asyncio.gather(
            *(run(facts) for facts in facts_list), return_exceptions=True
        )
        outcomes: list[BatchOutcome] = []
        for index, result in enumerate(settled):
            if isinstance(result, BaseException):
                _logger.error(
                    "Failed to calculate score for product %s: %s", index, result
                )
                outcomes.append(FailedItem(index=index, error=result))
            else:
                outcomes.append(ScoredItem(index=index, scoring=result))
        return outcomes
