from __future__ import annotations

import logging

from ummah_speaks.classifier.prompt import (
    CLASSIFY_MAX_TOKENS,
    CLASSIFY_TEMPERATURE,
    SYSTEM_PROMPT,
)
from ummah_speaks.exceptions import ClassificationFailedError, ConfigurationError
from ummah_speaks.labels import Label, clamp_label
from ummah_speaks.llm.base import BaseLLMClient

logger = logging.getLogger(__name__)


class ClassifierGateway:
    """Turns free text into exactly one :class:`Label`.

    Whatever the model answers is clamped to the vocabulary, so a successful
    call always yields a usable label.
    """

    def __init__(self, llm_client: BaseLLMClient) -> None:
        self._llm = llm_client

    async def classify(self, text: str) -> Label:
        message = text.strip()
        if not message:
            raise ClassificationFailedError("message is required")

        try:
            raw = await self._llm.completion(
                message,
                system=SYSTEM_PROMPT,
                temperature=CLASSIFY_TEMPERATURE,
                max_tokens=CLASSIFY_MAX_TOKENS,
            )
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ClassificationFailedError(str(exc)) from exc

        label = clamp_label(raw)
        if label.value.lower() != raw.strip().lower():
            logger.info("Classifier answered %r, using %s", raw, label)
        return label
