from __future__ import annotations

import os
from dataclasses import dataclass

from keyword_fetcher.engine import DEFAULT_PACING_SECONDS
from keyword_fetcher.providers import DEFAULT_PROVIDER_ORDER, list_providers

DEFAULT_SERVICE_ACCOUNT_PATH = "serviceAccountKey.json"
DEFAULT_USER_AGENT = "keyword-fetcher/0.1.0 (keyword enrichment batch; bot)"


@dataclass(frozen=True)
class Settings:
    firebase_database_url: str
    firebase_service_account_path: str = DEFAULT_SERVICE_ACCOUNT_PATH
    fetch_pacing_seconds: float = DEFAULT_PACING_SECONDS
    fetch_timeout_seconds: float = 10.0
    fetch_provider_order: tuple[str, ...] = DEFAULT_PROVIDER_ORDER
    fetch_user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, require_firebase: bool = True) -> Settings:
        database_url = os.getenv("FIREBASE_DATABASE_URL")
        if require_firebase and not database_url:
            raise RuntimeError(
                "Missing required environment variables: FIREBASE_DATABASE_URL"
            )

        pacing_seconds = float(
            os.getenv("FETCH_PACING_SECONDS", str(DEFAULT_PACING_SECONDS))
        )
        if pacing_seconds < 0:
            raise RuntimeError("Invalid FETCH_PACING_SECONDS. Expected >= 0.")

        return cls(
            firebase_database_url=database_url or "",
            firebase_service_account_path=os.getenv(
                "FIREBASE_SERVICE_ACCOUNT_PATH", DEFAULT_SERVICE_ACCOUNT_PATH
            ),
            fetch_pacing_seconds=pacing_seconds,
            fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "10")),
            fetch_provider_order=_parse_provider_order(
                os.getenv("FETCH_PROVIDER_ORDER")
            ),
            fetch_user_agent=_non_empty(os.getenv("FETCH_USER_AGENT"))
            or DEFAULT_USER_AGENT,
            log_level=(_non_empty(os.getenv("LOG_LEVEL")) or "INFO").upper(),
        )


def _split_csv_ordered(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ()

    seen: set[str] = set()
    ordered: list[str] = []
    for raw_item in value.split(","):
        item = raw_item.strip().lower()
        if not item or item in seen:
            continue
        ordered.append(item)
        seen.add(item)

    return tuple(ordered)


def _parse_provider_order(value: str | None) -> tuple[str, ...]:
    order = _split_csv_ordered(value)
    if not order:
        return DEFAULT_PROVIDER_ORDER

    known = set(list_providers())
    unknown = [name for name in order if name not in known]
    if unknown:
        raise RuntimeError(
            f"Invalid FETCH_PROVIDER_ORDER. Unknown providers: {', '.join(unknown)}"
        )
    return order


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
