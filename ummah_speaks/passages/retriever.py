from __future__ import annotations

import logging
from collections.abc import Sequence

from ummah_speaks.exceptions import PassageNotFoundError
from ummah_speaks.labels import Label, search_term_for
from ummah_speaks.passages.models import Passage
from ummah_speaks.passages.source import DEFAULT_COLLECTIONS, PassageSource

logger = logging.getLogger(__name__)

MIN_PREFERRED_LENGTH = 80


def _body_length(passage: Passage) -> int:
    return len(passage.text.strip())


def select_passage(candidates: Sequence[Passage]) -> Passage | None:
    """Pick the shortest passage longer than 80 characters.

    Falls back to the shortest passage overall when none is long enough
    (short results tend to be titles or stubs). Empty bodies never win.
    """
    usable = sorted(
        (p for p in candidates if p.text.strip()),
        key=_body_length,
    )
    if not usable:
        return None
    for passage in usable:
        if _body_length(passage) > MIN_PREFERRED_LENGTH:
            return passage
    return usable[0]


class PassageRetriever:
    """Looks up a passage for a label, trying each collection in order."""

    def __init__(
        self,
        source: PassageSource,
        collections: Sequence[str] = DEFAULT_COLLECTIONS,
    ) -> None:
        if not collections:
            raise ValueError("At least one collection is required")
        self._source = source
        self._collections = tuple(collections)

    @property
    def collections(self) -> tuple[str, ...]:
        return self._collections

    async def retrieve(self, label: Label | str) -> Passage:
        term = search_term_for(label)
        for collection in self._collections:
            candidates = await self._source.search(term, collection)
            chosen = select_passage(candidates)
            if chosen is not None:
                logger.info(
                    "Found passage for %r in %s (%d chars)",
                    term,
                    collection,
                    len(chosen.text),
                )
                return chosen
            logger.info("No passage for %r in %s", term, collection)

        raise PassageNotFoundError(term, list(self._collections))
