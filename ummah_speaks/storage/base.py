from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """String key-value storage used for durable client-side state.

    Implementations may raise on any operation (disk full, database
    unavailable, ...); callers that must not fail are expected to guard.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for *key*, or ``None`` if it is not set."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*. Removing a missing key is a no-op."""
        ...
