from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("coindesk")
async def fetch_coindesk(
    http_client: httpx.AsyncClient, keyword: str
) -> dict[str, Any] | None:
    """Current Bitcoin price index. The feed is not searchable, so the
    keyword is only used for logging."""
    url = "https://api.coindesk.com/v1/bpi/currentprice.json"

    try:
        data = await get_json(http_client, url)
        bpi = data["bpi"]
        return {
            "time": data["time"]["updated"],
            "USD": bpi["USD"]["rate"],
            "GBP": bpi["GBP"]["rate"],
            "EUR": bpi["EUR"]["rate"],
        }
    except Exception:
        logger.exception("provider_fetch_failed provider=coindesk keyword=%s", keyword)
        return None
