from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from ummah_speaks.storage.base import KeyValueStorage

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9._-]+$")


class DiskStorage(KeyValueStorage):
    """One UTF-8 file per key under a base directory."""

    def __init__(self, base_path: str) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base / f"{key}.json"

    # ---- interface ----

    def get(self, key: str) -> str | None:
        path = self._resolve(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._resolve(key)
        # Write-then-rename so readers never see a half-written file.
        fd, tmp = tempfile.mkstemp(dir=self._base, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._resolve(key).unlink(missing_ok=True)
