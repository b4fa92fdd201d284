from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("openlibrary")
async def fetch_openlibrary(
    http_client: httpx.AsyncClient, keyword: str
) -> list[dict[str, Any]] | None:
    """Book search via Open Library API."""
    url = "https://openlibrary.org/search.json"
    params = {"q": keyword, "limit": str(MAX_ITEMS)}

    try:
        data = await get_json(http_client, url, params=params)
        return [
            {
                "title": doc.get("title"),
                "author_name": doc.get("author_name"),
                "first_publish_year": doc.get("first_publish_year"),
            }
            for doc in data["docs"][:MAX_ITEMS]
        ]
    except Exception:
        logger.exception(
            "provider_fetch_failed provider=openlibrary keyword=%s", keyword
        )
        return None
