from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial

import httpx

from keyword_fetcher.providers.base import AdapterFn, Provider, safe_fetch

_FETCHERS: dict[str, AdapterFn] = {}

# Registry order is the contract: the first two entries are the primary slots.
DEFAULT_PROVIDER_ORDER: tuple[str, ...] = (
    "wikipedia",
    "reddit",
    "duckduckgo",
    "hackernews",
    "publicapis",
    "openlibrary",
    "coindesk",
    "tvmaze",
)


def register(name: str) -> Callable[[AdapterFn], AdapterFn]:
    """Decorator to register a provider fetch function under ``name``."""

    def decorator(fetcher: AdapterFn) -> AdapterFn:
        _FETCHERS[name] = fetcher
        return fetcher

    return decorator


def get_fetcher(name: str) -> AdapterFn:
    if name not in _FETCHERS:
        raise ValueError(
            f"Provider '{name}' not found. Available: {list(_FETCHERS.keys())}"
        )
    return _FETCHERS[name]


def list_providers() -> list[str]:
    return list(_FETCHERS.keys())


def build_registry(
    http_client: httpx.AsyncClient,
    order: Sequence[str] = DEFAULT_PROVIDER_ORDER,
) -> tuple[Provider, ...]:
    seen: set[str] = set()
    providers: list[Provider] = []
    for name in order:
        if name in seen:
            raise ValueError(f"Provider '{name}' listed more than once.")
        seen.add(name)
        fetcher = get_fetcher(name)
        fetch = safe_fetch(name, partial(fetcher, http_client))
        providers.append(Provider(name=name, fetch=fetch))
    return tuple(providers)
