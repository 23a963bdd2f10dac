"""Staging index: the file list awaiting the next commit."""

import logging

from .commit import FileEntry, format_entries, parse_entries
from .kv.base import KVStore

logger = logging.getLogger(__name__)

INDEX_KEY = "__index__"
PENDING_BLOB = "__pending__%s"


class StagingIndex:
    """Append-only list of ``(path, fingerprint)`` entries.

    Entries are persisted in the backend on every append. The bytes
    read at staging time are kept as pending blobs until commit, so a
    commit records the content as it was when the file was added.
    Duplicate paths are kept verbatim.
    """

    def __init__(self, store: KVStore) -> None:
        self.store = store

    def entries(self) -> list[FileEntry]:
        raw = self.store.get(INDEX_KEY)
        if not raw:
            return []
        return parse_entries(raw.decode("utf-8"))

    def append(self, entry: FileEntry, content: bytes | None = None) -> None:
        """Append ``entry``, remembering ``content`` as its pending blob.

        ``content`` is None when the blob already lives in the object
        store (merge restages existing blobs).
        """
        raw = self.store.get(INDEX_KEY) or b""
        updates = {INDEX_KEY: raw + format_entries([entry]).encode("utf-8")}
        if content is not None:
            updates[PENDING_BLOB % entry.blob] = content
        self.store.write_batch(updates)
        logger.debug("Staged %s as %s", entry.path, entry.blob)

    def pending(self, blob: str) -> bytes | None:
        return self.store.get(PENDING_BLOB % blob)

    def clear(self) -> None:
        self.store.write_batch(*self.clear_batch())

    def clear_batch(self) -> tuple[dict[str, bytes], list[str]]:
        """Backend updates and removals that empty the index."""
        removals = [PENDING_BLOB % entry.blob for entry in self.entries()]
        return {INDEX_KEY: b""}, removals
