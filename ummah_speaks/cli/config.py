"""Configuration management for the ummah-speaks CLI.

Reads/writes a TOML config file and provides a typed Config dataclass.
Default location: ``~/.config/ummah-speaks/config.toml``.
Override with the ``UMMAH_SPEAKS_CONFIG`` environment variable.

Data directory layout::

    data/
      journal/     <- saved reflections (disk storage)
      journal.db   <- saved reflections (sqlite storage)
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ummah_speaks.llm.models import DEFAULT_MODEL

_DEFAULT_CONFIG_DIR = Path("~/.config/ummah-speaks").expanduser()
_DEFAULT_DATA_DIR = Path("~/.local/share/ummah-speaks").expanduser()


def _config_path() -> Path:
    env = os.environ.get("UMMAH_SPEAKS_CONFIG")
    if env:
        return Path(env).expanduser()
    return _DEFAULT_CONFIG_DIR / "config.toml"


@dataclass
class Config:
    api_key: str = ""
    model: str = str(DEFAULT_MODEL)

    user_name: str = ""

    # Storage backend: "disk" (default), "sqlite" or "memory"
    storage_provider: str = "disk"

    data_dir: str = str(_DEFAULT_DATA_DIR)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def storage_config(self) -> dict:
        if self.storage_provider == "disk":
            return {"base_path": str(Path(self.data_dir) / "journal")}
        if self.storage_provider == "sqlite":
            return {"path": str(Path(self.data_dir) / "journal.db")}
        return {}

    def ensure_dirs(self) -> None:
        """Create the data directory if it doesn't exist."""
        Path(self.data_dir).mkdir(parents=True, exist_ok=True)


def load_config() -> Config:
    """Load config from disk, falling back to defaults + env overrides."""
    path = _config_path()
    cfg = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        llm_section = data.get("llm", {})
        user_section = data.get("user", {})
        storage_section = data.get("storage", {})
        data_section = data.get("data", {})

        cfg.api_key = llm_section.get("api_key", cfg.api_key)
        cfg.model = llm_section.get("model", cfg.model)
        cfg.user_name = user_section.get("name", cfg.user_name)
        cfg.storage_provider = storage_section.get("provider", cfg.storage_provider)
        cfg.data_dir = data_section.get("dir", cfg.data_dir)

    # Environment variables always take precedence
    cfg.api_key = os.environ.get("GROQ_API_KEY", cfg.api_key)
    cfg.model = os.environ.get("UMMAH_SPEAKS_MODEL", cfg.model)
    cfg.storage_provider = os.environ.get(
        "UMMAH_SPEAKS_STORAGE", cfg.storage_provider
    )

    return cfg


def save_config(cfg: Config) -> Path:
    """Write config to the TOML file. Returns the path written."""
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "[llm]",
        f'api_key = "{cfg.api_key}"',
        f'model = "{cfg.model}"',
        "",
        "[user]",
        f'name = "{cfg.user_name}"',
        "",
        "[storage]",
        f'provider = "{cfg.storage_provider}"',
        "",
        "[data]",
        f'dir = "{cfg.data_dir}"',
        "",
    ]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def config_exists() -> bool:
    return _config_path().exists()


def config_path_display() -> str:
    return str(_config_path())
