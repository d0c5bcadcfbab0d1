from __future__ import annotations

from kvcache.cache import Cache
from kvcache.config import CacheOptions
from kvcache.keys import KeyGenerationError, generate_key
from kvcache.persistence import StoragePersistence
from kvcache.presets import (
    Preset,
    create_cache,
    local_cache,
    memory_cache,
    session_cache,
)
from kvcache.storage import FileStorage, MemoryStorage, Storage

__all__ = [
    "Cache",
    "CacheOptions",
    "FileStorage",
    "KeyGenerationError",
    "MemoryStorage",
    "Preset",
    "Storage",
    "StoragePersistence",
    "create_cache",
    "generate_key",
    "local_cache",
    "memory_cache",
    "session_cache",
]
