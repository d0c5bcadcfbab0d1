from __future__ import annotations

from dataclasses import dataclass

KEY_SEPARATOR = "_"


@dataclass(frozen=True, slots=True)
class KeyGenerationError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


def generate_key(key: object) -> str:
    if not isinstance(key, (list, tuple)):
        return _to_str(key)
    try:
        parts = [item for item in key if item]
    except Exception as exc:
        raise KeyGenerationError("Can't filter key elements") from exc
    return KEY_SEPARATOR.join([_part_to_str(part) for part in parts])


def _part_to_str(part: object) -> str:
    # Only scalars join into a stable key; nested containers do not.
    if not isinstance(part, (str, int, float)):
        raise KeyGenerationError(
            f"Can't generate key from element of type {type(part).__name__}"
        )
    return _to_str(part)


def _to_str(value: object) -> str:
    try:
        return str(value)
    except Exception as exc:
        raise KeyGenerationError(
            f"Can't generate key from {type(value).__name__}"
        ) from exc
