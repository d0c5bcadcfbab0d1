from __future__ import annotations

from enum import Enum

from kvcache.cache import Cache
from kvcache.config import (
    DEFAULT_NAMESPACE,
    DEFAULT_SIZE,
    CacheOptions,
    ValueFactory,
    storage_path,
)
from kvcache.persistence import StoragePersistence
from kvcache.storage import SESSION_STORAGE, FileStorage, Storage


class Preset(Enum):
    MEMORY = "memory"
    SESSION = "session"
    LOCAL = "local"


def create_cache(
    preset: Preset = Preset.MEMORY, options: CacheOptions | None = None
) -> Cache:
    opts = options if options is not None else CacheOptions()
    storage = _resolve_storage(preset, opts.storage)
    persistence = (
        StoragePersistence(storage=storage, namespace=opts.namespace)
        if storage is not None
        else None
    )
    return Cache(
        max_entries=opts.size,
        callback=opts.callback,
        persistence=persistence,
    )


def memory_cache(
    *, size: int = DEFAULT_SIZE, callback: ValueFactory | None = None
) -> Cache:
    return create_cache(Preset.MEMORY, CacheOptions(size=size, callback=callback))


def session_cache(
    *,
    size: int = DEFAULT_SIZE,
    callback: ValueFactory | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    storage: Storage | None = None,
) -> Cache:
    options = CacheOptions(
        size=size, callback=callback, namespace=namespace, storage=storage
    )
    return create_cache(Preset.SESSION, options)


def local_cache(
    *,
    size: int = DEFAULT_SIZE,
    callback: ValueFactory | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    storage: Storage | None = None,
) -> Cache:
    options = CacheOptions(
        size=size, callback=callback, namespace=namespace, storage=storage
    )
    return create_cache(Preset.LOCAL, options)


def _resolve_storage(preset: Preset, storage: Storage | None) -> Storage | None:
    if preset is Preset.MEMORY:
        return None
    if storage is not None:
        return storage
    if preset is Preset.SESSION:
        return SESSION_STORAGE
    return FileStorage(path=storage_path())
