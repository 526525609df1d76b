from enum import StrEnum


class GroqModel(StrEnum):
    LLAMA_33_70B = "groq/llama-3.3-70b-versatile"
    LLAMA_31_8B = "groq/llama-3.1-8b-instant"


class OpenAIModel(StrEnum):
    GPT_4O = "openai/gpt-4o"
    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_4_1_MINI = "openai/gpt-4.1-mini"


DEFAULT_MODEL = GroqModel.LLAMA_33_70B
