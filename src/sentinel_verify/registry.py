"""
Read-only public-key registry.

The registry is the sole authority mapping key_id -> (public_key, status).
Anchors only carry a key_id.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .errors import MalformedRecordError
from .models import Key, KeyStatus

logger = logging.getLogger(__name__)


class KeyRegistry(Mapping[str, Key]):
    """Immutable key_id -> Key mapping with lifecycle helpers."""

    def __init__(self, keys: Iterable[Key] = ()):
        by_id: dict[str, Key] = {}
        for key in keys:
            if key.key_id in by_id:
                raise MalformedRecordError(
                    f"Duplicate key_id in registry: {key.key_id}",
                    {"key_id": key.key_id},
                )
            by_id[key.key_id] = key
        self._keys = MappingProxyType(by_id)
        logger.debug("Key registry built with %d keys", len(by_id))

    def lookup(self, key_id: str) -> Key | None:
        """Return the key for key_id, or None when the registry has no entry."""
        return self._keys.get(key_id)

    def __getitem__(self, key_id: str) -> Key:
        return self._keys[key_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def count_by_status(self) -> dict[str, int]:
        """Number of keys per lifecycle status, every status present."""
        counts = {status.value: 0 for status in KeyStatus}
        for key in self._keys.values():
            counts[key.status.value] += 1
        return counts
