from ummah_speaks.llm.base import BaseLLMClient
from ummah_speaks.llm.litellm import LiteLLMClient
from ummah_speaks.llm.models import DEFAULT_MODEL, GroqModel, OpenAIModel

__all__ = [
    "DEFAULT_MODEL",
    "BaseLLMClient",
    "GroqModel",
    "LiteLLMClient",
    "OpenAIModel",
]
