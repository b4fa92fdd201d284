from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

from keyword_fetcher.keywords import Keyword
from keyword_fetcher.meaningful import is_meaningful
from keyword_fetcher.providers.base import Provider, safe_fetch
from keyword_fetcher.store import ResultStore, ResultStoreError

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

DEFAULT_PACING_SECONDS = 1.5
PRIMARY_SLOTS = 2
TARGET_RESULTS = 2


@dataclass(frozen=True)
class KeywordOutcome:
    keyword: Keyword
    accepted: tuple[str, ...]
    attempted: tuple[str, ...]
    store_failed: bool = False

    @property
    def has_data(self) -> bool:
        return bool(self.accepted)


@dataclass
class _KeywordState:
    keyword: Keyword
    # Insertion ordered; a provider name is added once, before its fetch.
    attempted: dict[str, None] = field(default_factory=dict)
    accepted: list[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return len(self.accepted) >= TARGET_RESULTS

    def outcome(self, *, store_failed: bool = False) -> KeywordOutcome:
        return KeywordOutcome(
            keyword=self.keyword,
            accepted=tuple(self.accepted),
            attempted=tuple(self.attempted),
            store_failed=store_failed,
        )


class OrchestrationEngine:
    """Collects up to two meaningful provider responses for one keyword.

    The first two registry entries are primary slots. When a slot's provider
    fails, the registry is scanned in order for the first untried provider that
    succeeds. If fewer than two responses were accepted after both slots, every
    remaining provider is tried in order until two are accepted. A provider is
    fetched at most once per keyword; when a fallback scan has already used the
    provider of the second slot, that slot's own attempt is a no-op and it goes
    straight to its fallback scan.

    Calls are paced with a fixed delay to stay clear of upstream rate limits.
    """

    def __init__(
        self,
        *,
        providers: Sequence[Provider],
        store: ResultStore,
        delay_seconds: float = DEFAULT_PACING_SECONDS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        names = [provider.name for provider in providers]
        if len(set(names)) != len(names):
            raise ValueError(f"Provider names must be unique: {names}")

        self._providers = tuple(
            Provider(
                name=provider.name, fetch=safe_fetch(provider.name, provider.fetch)
            )
            for provider in providers
        )
        self._store = store
        self._delay_seconds = max(0.0, delay_seconds)
        self._sleep = sleep

    async def process(self, keyword: Keyword) -> KeywordOutcome:
        state = _KeywordState(keyword=keyword)
        try:
            await self._run(state)
        except ResultStoreError:
            logger.exception(
                "keyword_store_failed keyword=%s attempted=%d accepted=%d",
                keyword.text,
                len(state.attempted),
                len(state.accepted),
            )
            return state.outcome(store_failed=True)
        return state.outcome()

    async def _run(self, state: _KeywordState) -> None:
        for provider in self._providers[:PRIMARY_SLOTS]:
            if not await self._attempt(state, provider):
                await self._fallback_scan(state)
            if state.done:
                return
            await self._pace()

        for provider in self._providers:
            if provider.name in state.attempted:
                continue
            if await self._attempt(state, provider) and state.done:
                return
            await self._pace()

    async def _fallback_scan(self, state: _KeywordState) -> None:
        for provider in self._providers:
            if provider.name in state.attempted:
                continue
            if await self._attempt(state, provider):
                return

    async def _attempt(self, state: _KeywordState, provider: Provider) -> bool:
        if provider.name in state.attempted:
            return False
        state.attempted[provider.name] = None

        logger.info(
            "provider_attempt provider=%s keyword=%s",
            provider.name,
            state.keyword.text,
        )
        data = await provider.fetch(state.keyword.text)
        if data is None or not is_meaningful(data):
            logger.info(
                "provider_not_meaningful provider=%s keyword=%s",
                provider.name,
                state.keyword.text,
            )
            return False

        await self._store.save(state.keyword.key, provider.name, data)
        state.accepted.append(provider.name)
        logger.info(
            "provider_saved provider=%s keyword=%s key=%s",
            provider.name,
            state.keyword.text,
            state.keyword.key,
        )
        return True

    async def _pace(self) -> None:
        await self._sleep(self._delay_seconds)
