from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from ummah_speaks.classifier.gateway import ClassifierGateway
from ummah_speaks.journal.store import JournalStore
from ummah_speaks.llm.base import BaseLLMClient
from ummah_speaks.passages.models import Passage
from ummah_speaks.passages.retriever import PassageRetriever
from ummah_speaks.passages.source import PassageSource
from ummah_speaks.pipeline.orchestrator import GuidancePipeline
from ummah_speaks.reflection.composer import ReflectionComposer
from ummah_speaks.reveal import RevealScheduler
from ummah_speaks.storage.memory import InMemoryStorage

DATE_LABEL = "1 Muharram 1445 AH"


class FakeLLMClient(BaseLLMClient):
    """Replays scripted answers; an ``Exception`` in the script is raised."""

    def __init__(self, *responses: str | Exception) -> None:
        self.responses: list[str | Exception] = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def completion(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if not self.responses:
            raise AssertionError("Unexpected completion call")
        answer = self.responses.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakePassageSource(PassageSource):
    """Answers per collection; an ``Exception`` value is raised."""

    def __init__(self, results: dict[str, list[Passage] | Exception] | None = None):
        self.results = results or {}
        self.calls: list[tuple[str, str]] = []

    async def search(self, term: str, collection: str) -> list[Passage]:
        self.calls.append((term, collection))
        result = self.results.get(collection, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


def _make_passage(length: int = 120, *, text: str | None = None, **kwargs) -> Passage:
    body = text if text is not None else ("x" * length)
    defaults: dict[str, Any] = {
        "header": "Narrated Anas:",
        "reference": "Book 1, Hadith 1",
        "source": "1",
        "collection": "muslim",
        "book_name": "Book of Faith",
        "chapter_name": "Chapter on patience",
        "number": 42,
    }
    defaults.update(kwargs)
    return Passage(text=body, **defaults)


@pytest.fixture()
def make_passage() -> Callable[..., Passage]:
    return _make_passage


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def journal(storage: InMemoryStorage) -> JournalStore:
    return JournalStore(storage)


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 12, 0, tzinfo=UTC)


@pytest.fixture()
def build_pipeline(
    journal: JournalStore,
) -> Callable[..., GuidancePipeline]:
    """Factory wiring fakes into a pipeline with an instant reveal."""

    def _build(
        classifier_llm: BaseLLMClient,
        source: PassageSource,
        composer_llm: BaseLLMClient,
        *,
        reveal_interval: float = 0,
        journal_store: JournalStore | None = journal,
    ) -> GuidancePipeline:
        return GuidancePipeline(
            classifier=ClassifierGateway(classifier_llm),
            retriever=PassageRetriever(source),
            composer=ReflectionComposer(composer_llm),
            journal=journal_store,
            reveal=RevealScheduler(reveal_interval),
            date_label=lambda: DATE_LABEL,
        )

    return _build


@pytest.fixture()
def fake_llm() -> type[FakeLLMClient]:
    return FakeLLMClient


@pytest.fixture()
def fake_source() -> type[FakePassageSource]:
    return FakePassageSource
