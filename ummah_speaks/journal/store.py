from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import TypeAdapter

from ummah_speaks.journal.models import JournalDraft, JournalEntry
from ummah_speaks.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "ummah-speaks-journal"
MAX_ENTRIES = 10

_ENTRIES = TypeAdapter(list[JournalEntry])


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class JournalStore:
    """Capped, newest-first history of completed reflections.

    Never raises for storage problems: a missing backend or a corrupt payload
    reads as an empty journal, and failed writes are logged and dropped.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None,
        *,
        key: str = STORAGE_KEY,
        max_entries: int = MAX_ENTRIES,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._storage = storage
        self._key = key
        self._max_entries = max_entries
        self._clock = clock

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def append(self, draft: JournalDraft) -> JournalEntry:
        entry = JournalEntry(
            **draft.model_dump(),
            id=_new_id(),
            timestamp=self._clock(),
        )
        if self._storage is None:
            logger.warning("No journal storage configured; entry %s not saved", entry.id)
            return entry

        # Re-read right before writing so back-to-back appends never
        # overwrite each other.
        entries = self.list_entries()
        updated = [entry, *entries][: self._max_entries]
        try:
            self._storage.set(self._key, _ENTRIES.dump_json(updated).decode("utf-8"))
        except Exception:
            logger.warning("Failed to save journal entry %s", entry.id, exc_info=True)
        else:
            logger.info("Saved journal entry %s (%d total)", entry.id, len(updated))
        return entry

    def list_entries(self) -> list[JournalEntry]:
        if self._storage is None:
            return []
        try:
            raw = self._storage.get(self._key)
            if not raw:
                return []
            return _ENTRIES.validate_json(raw)[: self._max_entries]
        except Exception:
            logger.warning("Journal unreadable; treating as empty", exc_info=True)
            return []

    def clear(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.remove(self._key)
        except Exception:
            logger.warning("Failed to clear journal", exc_info=True)
