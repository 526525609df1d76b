from __future__ import annotations

import logging

from ummah_speaks.exceptions import CompositionFailedError, ConfigurationError
from ummah_speaks.llm.base import BaseLLMClient
from ummah_speaks.reflection.prompt import (
    COMPOSE_MAX_TOKENS,
    COMPOSE_TEMPERATURE,
    SYSTEM_PROMPT,
    build_user_prompt,
)

logger = logging.getLogger(__name__)


class ReflectionComposer:
    """Writes a short personal message tying a passage to a feeling.

    The model is asked for two sentences, but the result is treated as opaque
    text: any non-empty answer counts as success.
    """

    def __init__(self, llm_client: BaseLLMClient) -> None:
        self._llm = llm_client

    async def compose(
        self,
        feeling: str,
        passage_text: str,
        name: str | None = None,
    ) -> str:
        if not feeling.strip() or not passage_text.strip():
            raise CompositionFailedError("both feeling and passage text are required")

        try:
            message = await self._llm.completion(
                build_user_prompt(feeling, passage_text, name),
                system=SYSTEM_PROMPT,
                temperature=COMPOSE_TEMPERATURE,
                max_tokens=COMPOSE_MAX_TOKENS,
            )
        except ConfigurationError:
            raise
        except Exception as exc:
            raise CompositionFailedError(str(exc)) from exc

        if not message.strip():
            raise CompositionFailedError("empty message")
        logger.info("Composed reflection (%d chars)", len(message))
        return message.strip()
