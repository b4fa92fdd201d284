from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Lists returned by remote APIs are cut down to this many items.
MAX_ITEMS = 3

ProviderResponse = dict[str, Any] | list[Any] | str | int | float | bool
FetchFn = Callable[[str], Awaitable[ProviderResponse | None]]
AdapterFn = Callable[[httpx.AsyncClient, str], Awaitable[ProviderResponse | None]]

# Returned by a fetch that failed; the classifier never accepts it.
ProviderFailure = None


@dataclass(frozen=True)
class Provider:
    """A named data source. ``fetch`` returns ``None`` on any failure."""

    name: str
    fetch: FetchFn


def safe_fetch(name: str, fetch: FetchFn) -> FetchFn:
    """Wrap ``fetch`` so that any exception becomes the failure sentinel."""

    async def guarded(keyword: str) -> ProviderResponse | None:
        try:
            return await fetch(keyword)
        except Exception:
            logger.exception(
                "provider_fetch_failed provider=%s keyword=%s", name, keyword
            )
            return ProviderFailure

    return guarded


async def get_json(
    http_client: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    response = await http_client.get(url, params=params, headers=headers)
    response.raise_for_status()
    return response.json()
