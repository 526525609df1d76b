from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ummah_speaks.passages.source import DEFAULT_COLLECTIONS, HadithApiSource
from ummah_speaks.storage.base import KeyValueStorage

if TYPE_CHECKING:
    from ummah_speaks.llm.base import BaseLLMClient


T = TypeVar("T")


class _Registry(Generic[T]):
    """Lazily-populated factory registry.

    Each backend registers itself via :meth:`register`. :meth:`build`
    resolves a provider name to a factory, calling
    ``factory.from_config(config)`` if available, otherwise
    ``factory(**config)``.
    """

    def __init__(self, label: str) -> None:
        self._label = label
        self._factories: dict[str, type[T]] = {}
        self._defaults_loaded = False

    def register(self, name: str, cls: type[T]) -> None:
        self._factories[name] = cls

    def available(self) -> list[str]:
        self._ensure_defaults()
        return list(self._factories)

    def build(self, provider: str, config: dict[str, Any]) -> T:
        self._ensure_defaults()
        factory = self._factories.get(provider)
        if factory is None:
            raise ValueError(
                f"Unknown {self._label} provider '{provider}'. "
                f"Available: {list(self._factories)}"
            )
        if hasattr(factory, "from_config"):
            return factory.from_config(config)  # type: ignore[return-value]
        return factory(**config)  # type: ignore[return-value]

    def _ensure_defaults(self) -> None:
        if not self._defaults_loaded:
            self._load_defaults()
            self._defaults_loaded = True

    def _load_defaults(self) -> None:
        """Override point; subclasses populate built-in factories here."""


class _StorageRegistry(_Registry[KeyValueStorage]):
    def _load_defaults(self) -> None:
        from ummah_speaks.storage.disk import DiskStorage
        from ummah_speaks.storage.memory import InMemoryStorage
        from ummah_speaks.storage.sqlite import SQLiteStorage

        self.register("disk", DiskStorage)
        self.register("memory", InMemoryStorage)
        self.register("sqlite", SQLiteStorage)


class _LLMRegistry(_Registry["BaseLLMClient"]):
    def _load_defaults(self) -> None:
        from ummah_speaks.llm.litellm import LiteLLMClient

        # litellm routes on the model prefix, so every name maps to one client.
        self.register("litellm", LiteLLMClient)
        self.register("groq", LiteLLMClient)
        self.register("openai", LiteLLMClient)


# Singleton instances
storage_registry = _StorageRegistry("storage")
llm_registry = _LLMRegistry("llm")


def parse_config(
    config: dict[str, Any],
) -> tuple[KeyValueStorage, BaseLLMClient, HadithApiSource, tuple[str, ...]]:
    """Parse a user config dict into ``(storage, llm_client, source, collections)``.

    Expected shape::

        {
            "storage": {"provider": "disk", "config": {"base_path": "./data"}},
            "llm": {"api_key": "gsk_...", "model": "groq/llama-3.3-70b-versatile"},
            "passages": {"collections": ["bukhari", "muslim"], "limit": 8},
        }

    ``storage`` defaults to in-memory and ``passages`` to the public hadith
    API. The ``llm`` section is required, but an empty ``api_key`` is
    accepted: the missing credential surfaces when a stage runs.
    """
    storage_cfg = config.get("storage") or {}
    llm_cfg = config.get("llm")
    passages_cfg = config.get("passages") or {}
    if llm_cfg is None:
        raise ValueError(
            "Missing 'llm' config section. "
            'Provide at least {"llm": {"api_key": "gsk_..."}}.'
        )

    storage = storage_registry.build(
        storage_cfg.get("provider", "memory"),
        storage_cfg.get("config", {}),
    )
    llm_client = llm_registry.build(
        llm_cfg.get("provider", "litellm"),
        llm_cfg,
    )
    source = HadithApiSource.from_config(passages_cfg)
    collections = tuple(passages_cfg.get("collections") or DEFAULT_COLLECTIONS)

    return storage, llm_client, source, collections
