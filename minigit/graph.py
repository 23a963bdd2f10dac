"""Commit graph: loading records and walking parent links."""

import logging
from typing import Iterator

from .commit import Commit, is_commit_record
from .errors import CommitNotFound
from .objects import ObjectStore

logger = logging.getLogger(__name__)


def load_commit(objects: ObjectStore, commit_hash: str) -> Commit:
    """Load and parse the commit record stored under ``commit_hash``.

    Raises:
        CommitNotFound: If no object exists under that fingerprint, or
            the object is a blob rather than a commit.
    """
    raw = objects.get(commit_hash)
    if raw is None or not is_commit_record(raw):
        raise CommitNotFound(commit_hash)
    try:
        return Commit.parse(raw)
    except ValueError as e:
        raise CommitNotFound(commit_hash) from e


def history(objects: ObjectStore, start: str | None) -> Iterator[tuple[str, Commit]]:
    """Yield ``(commit_hash, commit)`` from ``start`` back to the root.

    Follows the single parent pointer of each record, newest first.
    Records are loaded lazily; a missing one raises ``CommitNotFound``
    at that point in the walk.
    """
    current = start or None
    while current is not None:
        commit = load_commit(objects, current)
        yield current, commit
        current = commit.parent
