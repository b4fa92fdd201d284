from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("publicapis")
async def fetch_publicapis(
    http_client: httpx.AsyncClient, keyword: str
) -> list[dict[str, Any]] | None:
    url = "https://api.publicapis.org/entries"

    try:
        data = await get_json(http_client, url, params={"title": keyword})
        return list(data.get("entries") or [])[:MAX_ITEMS]
    except Exception:
        logger.exception(
            "provider_fetch_failed provider=publicapis keyword=%s", keyword
        )
        return None
