from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from kvcache.storage import Storage

DEFAULT_SIZE: Final[int] = 30
DEFAULT_NAMESPACE: Final[str] = "cacheJs"
STORAGE_KEY_SUFFIX: Final[str] = "_cache"
STORAGE_DIR_NAME: Final[str] = "kvcache"
STORAGE_FILE_NAME: Final[str] = "storage.json"
STORAGE_PATH_ENV: Final[str] = "KVCACHE_STORAGE_PATH"

ValueFactory = Callable[[], object]


@dataclass(frozen=True, slots=True)
class CacheOptions:
    size: int = DEFAULT_SIZE
    callback: ValueFactory | None = None
    namespace: str = DEFAULT_NAMESPACE
    storage: Storage | None = None

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValueError("size must be an integer")
        if self.size <= 0:
            raise ValueError("size must be positive")


def storage_path() -> Path:
    override = os.environ.get(STORAGE_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    xdg_home = os.environ.get("XDG_DATA_HOME")
    if xdg_home:
        return Path(xdg_home) / STORAGE_DIR_NAME / STORAGE_FILE_NAME
    return Path.home() / ".local" / "share" / STORAGE_DIR_NAME / STORAGE_FILE_NAME
