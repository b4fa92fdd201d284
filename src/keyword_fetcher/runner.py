from __future__ import annotations

import logging
from dataclasses import dataclass

from keyword_fetcher.engine import KeywordOutcome, OrchestrationEngine
from keyword_fetcher.keywords import parse_keywords
from keyword_fetcher.store import KeywordSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSummary:
    outcomes: tuple[KeywordOutcome, ...] = ()

    @property
    def with_data(self) -> tuple[KeywordOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.has_data)

    @property
    def without_data(self) -> tuple[KeywordOutcome, ...]:
        return tuple(
            outcome
            for outcome in self.outcomes
            if not outcome.has_data and not outcome.store_failed
        )

    @property
    def store_failures(self) -> tuple[KeywordOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.store_failed)


class Runner:
    """Feeds every keyword from the source through the engine, one at a time."""

    def __init__(self, *, source: KeywordSource, engine: OrchestrationEngine) -> None:
        self._source = source
        self._engine = engine

    async def run(self) -> RunSummary:
        keywords = parse_keywords(await self._source.list_keywords())
        if not keywords:
            logger.info("no_keywords")
            return RunSummary()

        outcomes: list[KeywordOutcome] = []
        for keyword in keywords:
            logger.info("keyword_processing keyword=%s", keyword.text)
            outcome = await self._engine.process(keyword)
            if not outcome.has_data and not outcome.store_failed:
                logger.warning(
                    "keyword_no_data keyword=%s attempted=%d",
                    keyword.text,
                    len(outcome.attempted),
                )
            outcomes.append(outcome)

        summary = RunSummary(outcomes=tuple(outcomes))
        logger.info(
            "run_complete keywords=%d with_data=%d without_data=%d store_failures=%d",
            len(summary.outcomes),
            len(summary.with_data),
            len(summary.without_data),
            len(summary.store_failures),
        )
        return summary
