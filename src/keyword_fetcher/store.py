from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import firebase_admin
from firebase_admin import credentials, db

from keyword_fetcher.providers.base import ProviderResponse

if TYPE_CHECKING:
    from keyword_fetcher.config import Settings

logger = logging.getLogger(__name__)

RESULTS_ROOT = "results"
KEYWORDS_ROOT = "keywords"


class ResultStoreError(Exception):
    def __init__(self, message: str, *, keyword: str, provider: str) -> None:
        super().__init__(message)
        self.keyword = keyword
        self.provider = provider


class ResultStore(Protocol):
    async def save(
        self, keyword_key: str, provider_name: str, data: ProviderResponse
    ) -> None: ...


class KeywordSource(Protocol):
    async def list_keywords(self) -> list[object]: ...


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    options = {"databaseURL": settings.firebase_database_url}
    service_account_path = settings.firebase_service_account_path
    if service_account_path and Path(service_account_path).exists():
        cred = credentials.Certificate(service_account_path)
        return firebase_admin.initialize_app(cred, options)

    # Application default credentials (Cloud Run, GCE, gcloud auth)
    logger.info(
        "firebase_default_credentials service_account_path=%s", service_account_path
    )
    return firebase_admin.initialize_app(options=options)


class FirebaseResultStore:
    """Writes accepted responses to ``results/<keyword key>/<provider>``.

    The Admin SDK is blocking, so calls run in a worker thread.
    """

    def __init__(
        self, *, app: firebase_admin.App | None = None, root: str = RESULTS_ROOT
    ) -> None:
        self._app = app
        self._root = root.strip("/")

    async def save(
        self, keyword_key: str, provider_name: str, data: ProviderResponse
    ) -> None:
        path = f"{self._root}/{keyword_key}/{provider_name}"
        try:
            ref = db.reference(path, app=self._app)
            await asyncio.to_thread(ref.set, data)
        except Exception as exc:
            raise ResultStoreError(
                f"Failed to write {path}: {exc}",
                keyword=keyword_key,
                provider=provider_name,
            ) from exc

    async def load_all(self) -> dict[str, Any]:
        ref = db.reference(self._root, app=self._app)
        data = await asyncio.to_thread(ref.get)
        if not isinstance(data, dict):
            return {}
        return data


class FirebaseKeywordSource:
    def __init__(
        self, *, app: firebase_admin.App | None = None, root: str = KEYWORDS_ROOT
    ) -> None:
        self._app = app
        self._root = root.strip("/")

    async def list_keywords(self) -> list[object]:
        ref = db.reference(self._root, app=self._app)
        data = await asyncio.to_thread(ref.get)
        # Children with integer keys come back as a list with gaps as None.
        if isinstance(data, dict):
            return list(data.values())
        if isinstance(data, list):
            return [item for item in data if item is not None]
        return []


class FileKeywordSource:
    """One keyword per line; blank lines and ``#`` comments are ignored."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def list_keywords(self) -> list[object]:
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        return [
            line
            for line in (raw.strip() for raw in text.splitlines())
            if line and not line.startswith("#")
        ]
