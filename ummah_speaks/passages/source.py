from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from ummah_speaks.exceptions import PassageRetrievalError
from ummah_speaks.passages.models import Passage, RawPassage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hadithapi.pages.dev/api"
DEFAULT_COLLECTIONS: tuple[str, ...] = ("bukhari", "muslim")
DEFAULT_LIMIT = 8
DEFAULT_TIMEOUT_SECS = 15.0


class PassageSource(ABC):
    """Searches one collection of a text corpus."""

    @abstractmethod
    async def search(self, term: str, collection: str) -> list[Passage]:
        """Return every candidate for *term* in *collection*.

        An empty list means "nothing here"; transport failures raise
        :class:`PassageRetrievalError`.
        """
        ...


class HadithApiSource(PassageSource):
    """Passage source backed by the public hadith search API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        limit: int = DEFAULT_LIMIT,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._limit = limit
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> HadithApiSource:
        return cls(
            base_url=config.get("base_url", DEFAULT_BASE_URL),
            limit=int(config.get("limit", DEFAULT_LIMIT)),
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT_SECS)),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def search(self, term: str, collection: str) -> list[Passage]:
        params = {"q": term, "collection": collection, "limit": self._limit}
        url = f"{self._base_url}/search"
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise PassageRetrievalError(str(exc)) from exc

        if not response.is_success:
            logger.warning(
                "Search %r in %s returned HTTP %d",
                term,
                collection,
                response.status_code,
            )
            return []

        try:
            data = response.json()
        except ValueError as exc:
            raise PassageRetrievalError(f"invalid JSON from {collection}") from exc

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            return []

        passages: list[Passage] = []
        for item in results:
            try:
                passages.append(RawPassage.model_validate(item).to_passage())
            except ValidationError:
                logger.warning("Skipping malformed result: %.200r", item)
        logger.info("Search %r in %s: %d results", term, collection, len(passages))
        return passages
