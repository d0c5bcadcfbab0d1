from __future__ import annotations

import json
from pathlib import Path

import pytest

from kvcache import presets
from kvcache.config import CacheOptions, storage_path
from kvcache.presets import (
    Preset,
    create_cache,
    local_cache,
    memory_cache,
    session_cache,
)
from kvcache.storage import FileStorage, MemoryStorage


@pytest.fixture()
def session_storage(monkeypatch: pytest.MonkeyPatch) -> MemoryStorage:
    storage = MemoryStorage()
    monkeypatch.setattr(presets, "SESSION_STORAGE", storage)
    return storage


@pytest.fixture()
def durable_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "durable.json"
    monkeypatch.setenv("KVCACHE_STORAGE_PATH", str(path))
    return path


def test_memory_preset_has_no_persistence() -> None:
    cache = memory_cache(size=3, callback=lambda: 0)

    assert cache.persistence is None
    assert cache.max_entries == 3
    assert cache.read("missing") == 0


def test_session_preset_binds_session_storage(session_storage: MemoryStorage) -> None:
    cache = session_cache(namespace="tab")
    cache.write("a", 1)

    assert session_storage.get_item("tab_cache") == '{"a": 1}'
    assert session_cache(namespace="tab").read("a") == 1


def test_local_preset_survives_new_instances(durable_path: Path) -> None:
    local_cache().write(["user", 7], {"name": "ann"})

    assert json.loads(durable_path.read_text(encoding="utf-8")) == {
        "cacheJs_cache": '{"user_7": {"name": "ann"}}'
    }
    assert local_cache().read_all() == {"user_7": {"name": "ann"}}


def test_explicit_storage_overrides_preset_default(
    session_storage: MemoryStorage,
) -> None:
    custom = MemoryStorage()
    cache = create_cache(Preset.SESSION, CacheOptions(storage=custom))
    cache.write("a", 1)

    assert custom.get_item("cacheJs_cache") == '{"a": 1}'
    assert session_storage.get_item("cacheJs_cache") is None


def test_memory_preset_ignores_storage() -> None:
    custom = MemoryStorage()
    cache = create_cache(Preset.MEMORY, CacheOptions(storage=custom))
    cache.write("a", 1)

    assert custom.get_item("cacheJs_cache") is None


def test_presets_share_behavior(
    session_storage: MemoryStorage, durable_path: Path
) -> None:
    for preset in Preset:
        cache = create_cache(preset, CacheOptions(size=2))
        cache.write("a", 1)
        cache.write("b", 2)
        cache.write("c", 3)

        assert cache.read_all() == {"b": 2, "c": 3}


@pytest.mark.parametrize("size", [0, -5])
def test_options_reject_non_positive_size(size: int) -> None:
    with pytest.raises(ValueError):
        CacheOptions(size=size)


def test_default_local_storage_uses_storage_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("KVCACHE_STORAGE_PATH", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    cache = local_cache()

    assert cache.persistence is not None
    storage = cache.persistence.storage  # type: ignore[attr-defined]
    assert isinstance(storage, FileStorage)
    assert storage.path == storage_path() == tmp_path / "kvcache" / "storage.json"


def test_storage_path_falls_back_to_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("KVCACHE_STORAGE_PATH", raising=False)
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert storage_path() == tmp_path / ".local" / "share" / "kvcache" / "storage.json"
