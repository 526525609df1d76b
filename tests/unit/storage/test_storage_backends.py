from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from ummah_speaks.storage.base import KeyValueStorage
from ummah_speaks.storage.disk import DiskStorage
from ummah_speaks.storage.memory import InMemoryStorage
from ummah_speaks.storage.sqlite import SQLiteStorage


@pytest.fixture(params=["memory", "disk", "sqlite"])
def backend(request, tmp_path: Path) -> Iterator[KeyValueStorage]:
    if request.param == "memory":
        yield InMemoryStorage()
    elif request.param == "disk":
        yield DiskStorage(str(tmp_path / "kv"))
    else:
        store = SQLiteStorage(str(tmp_path / "kv.db"))
        yield store
        store.close()


class TestKeyValueContract:
    def test_missing_key_is_none(self, backend: KeyValueStorage) -> None:
        assert backend.get("ummah-speaks-journal") is None

    def test_set_then_get(self, backend: KeyValueStorage) -> None:
        backend.set("ummah-speaks-journal", '[{"feeling": "صبر"}]')
        assert backend.get("ummah-speaks-journal") == '[{"feeling": "صبر"}]'

    def test_set_overwrites(self, backend: KeyValueStorage) -> None:
        backend.set("k", "one")
        backend.set("k", "two")
        assert backend.get("k") == "two"

    def test_remove(self, backend: KeyValueStorage) -> None:
        backend.set("k", "v")
        backend.remove("k")
        assert backend.get("k") is None

    def test_remove_missing_is_noop(self, backend: KeyValueStorage) -> None:
        backend.remove("never-set")
        assert backend.get("never-set") is None


class TestDiskStorage:
    def test_creates_base_dir_and_file(self, tmp_path: Path) -> None:
        base = tmp_path / "nested" / "journal"
        storage = DiskStorage(str(base))

        storage.set("ummah-speaks-journal", "[]")

        assert (base / "ummah-speaks-journal.json").read_text() == "[]"
        assert list(base.glob("*.tmp")) == []

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "sp ace"])
    def test_rejects_unsafe_keys(self, tmp_path: Path, key: str) -> None:
        storage = DiskStorage(str(tmp_path))
        with pytest.raises(ValueError, match="Invalid storage key"):
            storage.set(key, "v")


class TestSQLiteStorage:
    def test_in_memory_database(self) -> None:
        storage = SQLiteStorage()
        storage.set("k", "v")
        assert storage.get("k") == "v"
        storage.close()

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = str(tmp_path / "journal.db")
        first = SQLiteStorage(path)
        first.set("k", "kept")
        first.close()

        second = SQLiteStorage(path)
        assert second.get("k") == "kept"
        second.close()
