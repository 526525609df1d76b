from __future__ import annotations

from ummah_speaks.storage.base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage; contents vanish with the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
