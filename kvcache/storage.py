from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


def _default_items() -> dict[str, str]:
    return {}


@dataclass(slots=True)
class MemoryStorage:
    _items: dict[str, str] = field(default_factory=_default_items)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


# Session-scoped store: shared by every session cache for the life of the process.
SESSION_STORAGE = MemoryStorage()


@dataclass(slots=True)
class FileStorage:
    """Durable store persisted as one JSON object of string items.

    Every call reads the file again, so separate instances pointed at the same
    path observe each other's writes.
    """

    path: Path

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._save(items)

    def clear(self) -> None:
        self._save({})

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw_data = self.path.read_text(encoding="utf-8")
            payload: object = json.loads(raw_data)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Storage file %s unreadable: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Storage file %s does not hold an object", self.path)
            return {}
        return {
            key: value for key, value in payload.items() if isinstance(value, str)
        }

    def _save(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = json.dumps(items, ensure_ascii=True, indent=2)
        self.path.write_text(data, encoding="utf-8")
