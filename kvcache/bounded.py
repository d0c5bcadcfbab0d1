from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import logging

from kvcache.config import DEFAULT_SIZE

logger = logging.getLogger(__name__)


def _default_items() -> OrderedDict[str, object]:
    return OrderedDict()


@dataclass(slots=True)
class BoundedMap:
    """Insertion-ordered mapping that evicts its oldest entry when full.

    A full map evicts before every insert, including an overwrite of a key
    already present.
    """

    max_entries: int = DEFAULT_SIZE
    _items: OrderedDict[str, object] = field(default_factory=_default_items)

    def __post_init__(self) -> None:
        if isinstance(self.max_entries, bool) or not isinstance(self.max_entries, int):
            raise ValueError("max_entries must be an integer")
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")

    def size(self) -> int:
        return len(self._items)

    def has(self, key: str) -> bool:
        return key in self._items

    def get(self, key: str) -> object | None:
        return self._items.get(key)

    def insert(self, key: str, value: object) -> None:
        if len(self._items) >= self.max_entries:
            evicted, _ = self._items.popitem(last=False)
            logger.debug("Evicted oldest cache entry %s", evicted)
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def entries(self) -> Iterator[tuple[str, object]]:
        return iter(self._items.items())

    def snapshot(self) -> list[tuple[str, object]]:
        return list(self._items.items())

    def restore(self, items: Iterable[tuple[str, object]]) -> None:
        self._items = OrderedDict(items)
