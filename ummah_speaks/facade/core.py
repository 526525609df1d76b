"""Main facade for the ummah_speaks library."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from ummah_speaks.classifier.gateway import ClassifierGateway
from ummah_speaks.config import parse_config
from ummah_speaks.journal.store import JournalStore
from ummah_speaks.passages.retriever import PassageRetriever
from ummah_speaks.passages.source import DEFAULT_COLLECTIONS
from ummah_speaks.pipeline.orchestrator import GuidancePipeline
from ummah_speaks.reflection.composer import ReflectionComposer
from ummah_speaks.reveal import REVEAL_INTERVAL_SECS, RevealScheduler

if TYPE_CHECKING:
    from ummah_speaks.journal.models import JournalEntry
    from ummah_speaks.llm.base import BaseLLMClient
    from ummah_speaks.passages.source import PassageSource
    from ummah_speaks.pipeline.run import PipelineRun
    from ummah_speaks.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class UmmahSpeaks:
    """Main entry point for the ummah_speaks library.

    Wires the classifier, passage retriever and composer into a
    :class:`GuidancePipeline` whose completed runs land in a capped journal.

    Usage::

        app = UmmahSpeaks.from_config({
            "storage": {"provider": "disk", "config": {"base_path": "./data"}},
            "llm": {"api_key": "gsk_..."},
        })
        run = await app.reflect("I feel so alone and scared", name="Amina")
        print(run.label, run.message)
    """

    def __init__(
        self,
        storage: KeyValueStorage | None,
        llm_client: BaseLLMClient,
        source: PassageSource,
        *,
        collections: Sequence[str] = DEFAULT_COLLECTIONS,
        reveal_interval: float = REVEAL_INTERVAL_SECS,
    ) -> None:
        self._journal = JournalStore(storage)
        self._pipeline = GuidancePipeline(
            classifier=ClassifierGateway(llm_client),
            retriever=PassageRetriever(source, collections),
            composer=ReflectionComposer(llm_client),
            journal=self._journal,
            reveal=RevealScheduler(reveal_interval),
        )

    @classmethod
    def from_config(
        cls, config: dict[str, Any], *, reveal_interval: float = REVEAL_INTERVAL_SECS
    ) -> UmmahSpeaks:
        """Construct an instance from a configuration dict."""
        storage, llm_client, source, collections = parse_config(config)
        return cls(
            storage,
            llm_client,
            source,
            collections=collections,
            reveal_interval=reveal_interval,
        )

    @property
    def pipeline(self) -> GuidancePipeline:
        return self._pipeline

    @property
    def journal(self) -> JournalStore:
        return self._journal

    # ── Pipeline ─────────────────────────────────────────────────────

    def on_update(self, listener: Callable[[PipelineRun], None]) -> Callable[[], None]:
        return self._pipeline.on_update(listener)

    async def reflect(self, feeling: str, name: str | None = None) -> PipelineRun:
        return await self._pipeline.submit(feeling, name)

    def reset(self) -> PipelineRun:
        return self._pipeline.reset()

    # ── Journal ──────────────────────────────────────────────────────

    def journal_entries(self, limit: int | None = None) -> list[JournalEntry]:
        entries = self._journal.list_entries()
        return entries[:limit] if limit is not None else entries

    def clear_journal(self) -> None:
        logger.info("Clearing journal")
        self._journal.clear()
