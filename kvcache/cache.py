from __future__ import annotations

from dataclasses import dataclass, field
import logging

from kvcache.bounded import BoundedMap
from kvcache.config import DEFAULT_SIZE, ValueFactory
from kvcache.keys import generate_key
from kvcache.persistence import Persistence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class Cache:
    """Bounded key/value cache with optional snapshot persistence.

    Keys pass through ``generate_key`` on every call, so ``["a", "b"]`` and
    ``"a_b"`` address the same entry. When the cache is full the oldest
    inserted entry is evicted. A miss on ``read`` with a callback available
    stores the callback result through ``write``.

    With a ``persistence`` strategy the cache is hydrated from its snapshot on
    construction and every ``write``/``remove`` rewrites the full snapshot.
    A mutation whose snapshot cannot be saved is rolled back before the error
    propagates. ``clear`` only empties memory; the stored snapshot is left as
    it was.
    """

    max_entries: int = DEFAULT_SIZE
    callback: ValueFactory | None = None
    persistence: Persistence | None = None
    _entries: BoundedMap = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_entries", BoundedMap(max_entries=self.max_entries))
        if self.persistence is not None:
            self._hydrate(self.persistence)

    def size(self) -> int:
        return self._entries.size()

    def has(self, key: object) -> bool:
        return self._entries.has(generate_key(key))

    def clear(self) -> None:
        self._entries.clear()

    def read_all(
        self, default_value: dict[str, object] | None = None
    ) -> dict[str, object]:
        if not self.size():
            return default_value if default_value is not None else {}
        return dict(self._entries.entries())

    def read(self, key: object, callback: ValueFactory | None = None) -> object | None:
        real_key = generate_key(key)
        if self._entries.has(real_key):
            return self._entries.get(real_key)
        factory = callback if callback is not None else self.callback
        if factory is None:
            return None
        value = factory()
        self.write(real_key, value)
        return value

    def write(self, key: object, value: object) -> None:
        previous = self._entries.snapshot()
        self._write(key, value)
        self._sync(previous)

    def remove(self, key: object) -> None:
        previous = self._entries.snapshot()
        self._remove(key)
        self._sync(previous)

    def _write(self, key: object, value: object) -> None:
        self._entries.insert(generate_key(key), value)

    def _remove(self, key: object) -> None:
        self._entries.remove(generate_key(key))

    def _sync(self, previous: list[tuple[str, object]]) -> None:
        if self.persistence is None:
            return
        try:
            self.persistence.save(self.read_all())
        except Exception:
            self._entries.restore(previous)
            raise

    def _hydrate(self, persistence: Persistence) -> None:
        # Snapshot order is insertion order, so overflow evicts oldest-loaded first.
        snapshot = persistence.load()
        for key, value in snapshot.items():
            self._entries.insert(key, value)
        if len(snapshot) > self.size():
            logger.debug(
                "Hydrated %d of %d snapshot entries", self.size(), len(snapshot)
            )
