from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Protocol, TypeAlias

from kvcache.config import DEFAULT_NAMESPACE, STORAGE_KEY_SUFFIX
from kvcache.storage import Storage

logger = logging.getLogger(__name__)

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)


class Persistence(Protocol):
    def load(self) -> dict[str, JsonValue]: ...

    def save(self, snapshot: dict[str, object]) -> None: ...


@dataclass(frozen=True, slots=True)
class StoragePersistence:
    """Keeps a whole cache snapshot under a single storage item.

    The snapshot is a flat JSON object of normalized cache keys to values.
    """

    storage: Storage
    namespace: str = DEFAULT_NAMESPACE

    @property
    def storage_key(self) -> str:
        return f"{self.namespace or DEFAULT_NAMESPACE}{STORAGE_KEY_SUFFIX}"

    def load(self) -> dict[str, JsonValue]:
        raw_data = self.storage.get_item(self.storage_key)
        if raw_data is None:
            return {}
        try:
            payload: JsonValue = json.loads(raw_data)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring malformed snapshot %s: %s", self.storage_key, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring non-object snapshot %s", self.storage_key)
            return {}
        return payload

    def save(self, snapshot: dict[str, object]) -> None:
        self.storage.set_item(self.storage_key, json.dumps(snapshot))
