"""Content-addressable, append-only object store."""

import logging
from typing import Mapping

from .fingerprint import fingerprint
from .kv.base import KVStore

logger = logging.getLogger(__name__)

OBJECT_KEY = "__object__%s"


class ObjectStore:
    """Blobs and serialized commits keyed by their fingerprint.

    Objects are immutable: writing the same bytes twice lands on the
    same key with the same value, so ``put`` never checks for a prior
    copy.
    """

    def __init__(self, store: KVStore) -> None:
        self.store = store

    def put(self, data: bytes) -> str:
        """Write ``data`` under its fingerprint and return the fingerprint."""
        token = fingerprint(data)
        self.store.set(OBJECT_KEY % token, data)
        logger.debug("Stored object %s (%d bytes)", token, len(data))
        return token

    def get(self, token: str) -> bytes | None:
        """Get the object stored under ``token``, or None if absent."""
        return self.store.get(OBJECT_KEY % token)

    def __contains__(self, token: str) -> bool:
        return OBJECT_KEY % token in self.store

    @staticmethod
    def batch(objects: Mapping[str, bytes]) -> dict[str, bytes]:
        """Backend writes for ``{token: data}``, to land in a larger batch."""
        return {OBJECT_KEY % token: data for token, data in objects.items()}
