from __future__ import annotations

from abc import ABC, abstractmethod


class BaseLLMClient(ABC):
    """Chat-completion contract shared by the classifier and the composer."""

    @abstractmethod
    async def completion(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return the stripped text of a single completion.

        Raises :class:`~ummah_speaks.exceptions.ConfigurationError` when the
        client has no credentials, and lets transport errors propagate.
        """
        ...
