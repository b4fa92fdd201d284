# Importing the adapter modules registers them.
from keyword_fetcher.providers import (  # noqa: F401
    coindesk,
    duckduckgo,
    hackernews,
    openlibrary,
    publicapis,
    reddit,
    tvmaze,
    wikipedia,
)
from keyword_fetcher.providers.base import (
    MAX_ITEMS,
    Provider,
    ProviderFailure,
    ProviderResponse,
    safe_fetch,
)
from keyword_fetcher.providers.registry import (
    DEFAULT_PROVIDER_ORDER,
    build_registry,
    get_fetcher,
    list_providers,
)

__all__ = [
    "DEFAULT_PROVIDER_ORDER",
    "MAX_ITEMS",
    "Provider",
    "ProviderFailure",
    "ProviderResponse",
    "build_registry",
    "get_fetcher",
    "list_providers",
    "safe_fetch",
]
