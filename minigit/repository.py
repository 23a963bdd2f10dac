"""Repository: staging, commits, branches, checkout, merge, log, diff."""

import logging
from dataclasses import dataclass
from typing import Iterator

from .commit import Commit, FileEntry
from .diff import FileDiff, diff_commits
from .errors import (
    BlobNotFound,
    BranchExists,
    BranchNotFound,
    EmptyBranch,
    InvalidPath,
    NoCommits,
    NotInitialized,
    NothingStaged,
    WriteFailed,
)
from .fingerprint import fingerprint
from .graph import history, load_commit
from .index import INDEX_KEY, StagingIndex
from .kv.base import KVStore
from .kv.memory import Memory
from .objects import ObjectStore
from .working import WorkingSet

logger = logging.getLogger(__name__)

REPO_MARKER = "__repo__"
HEAD_KEY = "__head__"
BRANCH_REF = "__ref__%s"


@dataclass(frozen=True)
class CheckoutResult:
    """Result of materializing a commit into the working set."""

    commit: str
    written: tuple[str, ...]
    skipped: tuple[str, ...]


@dataclass(frozen=True)
class MergeResult:
    """Result of merging a branch by overwrite."""

    commit: str
    source_branch: str
    written: tuple[str, ...]
    skipped: tuple[str, ...]


class Repository:
    """A local repository over a KV store and a working set.

    All persistent state (objects, HEAD, branch refs and the staging
    index) lives in ``store``. Operations raise ``MinigitError``
    subclasses for whole-operation failures; a missing blob or a file
    that can't be written is logged and reported in the result instead.
    """

    def __init__(
        self,
        store: KVStore | None = None,
        working: WorkingSet | None = None,
        *,
        location: str = "<memory>",
    ) -> None:
        if store is None:
            store = Memory()
        self.store = store
        self.working = working if working is not None else WorkingSet()
        self.location = location
        self.objects = ObjectStore(store)
        self.index = StagingIndex(store)

    # -- Lifecycle --

    def init(self) -> bool:
        """Create the repository. Returns False if it already existed."""
        if not self.store.cas(REPO_MARKER, b"1", expected=None):
            return False
        self.store.write_batch({HEAD_KEY: b"", INDEX_KEY: b""})
        logger.info("Initialized empty repository in %s", self.location)
        return True

    def exists(self) -> bool:
        return REPO_MARKER in self.store

    def close(self) -> None:
        self.store.close()

    def _require_repo(self) -> None:
        if not self.exists():
            raise NotInitialized(self.location)

    # -- HEAD --

    @property
    def head(self) -> str | None:
        """Fingerprint of the current commit, or None before the first commit."""
        raw = self.store.get(HEAD_KEY)
        if not raw:
            return None
        return raw.decode("utf-8").strip() or None

    # -- Staging / commit --

    def stage(self, path: str) -> FileEntry:
        """Schedule the current content of ``path`` for the next commit.

        Raises:
            InvalidPath: If ``path`` contains a line break, which the
                line-based index and commit records can't hold.
            FileNotFound: If the file can't be read. Nothing is staged.
        """
        self._require_repo()
        if "\n" in path or "\r" in path:
            raise InvalidPath(path)
        content = self.working.read(path)
        entry = FileEntry(path, fingerprint(content))
        self.index.append(entry, content)
        return entry

    def commit(self, message: str) -> str:
        """Record the staged entries as a new commit and move HEAD to it.

        Blob contents are written into the object store here, together
        with the commit record, the HEAD update and the index reset.

        Returns:
            The new commit fingerprint.

        Raises:
            NothingStaged: If the index is empty. Nothing is written.
        """
        self._require_repo()
        entries = self.index.entries()
        if not entries:
            raise NothingStaged()

        blobs: dict[str, bytes] = {}
        for entry in entries:
            if entry.blob in blobs or entry.blob in self.objects:
                continue
            content = self.index.pending(entry.blob)
            if content is None:
                raise BlobNotFound(entry.path, entry.blob)
            blobs[entry.blob] = content

        record = Commit.create(message, self.head, entries)
        raw = record.serialize()
        commit_hash = fingerprint(raw)
        blobs[commit_hash] = raw

        updates, removals = self.index.clear_batch()
        updates.update(self.objects.batch(blobs))
        updates[HEAD_KEY] = commit_hash.encode("utf-8")
        self.store.write_batch(updates, removals)

        logger.info("Committed %s (%d files)", commit_hash, len(entries))
        return commit_hash

    # -- Branches --

    def branch(self, name: str) -> str:
        """Create branch ``name`` at the current HEAD.

        Returns:
            The commit fingerprint the branch points at.

        Raises:
            NoCommits: If nothing has been committed yet.
            BranchExists: If the branch already exists. It is left as is.
        """
        self._require_repo()
        head = self.head
        if head is None:
            raise NoCommits()
        if not self.store.cas(BRANCH_REF % name, head.encode("utf-8"), expected=None):
            raise BranchExists(name)
        logger.info("Created branch %s at %s", name, head)
        return head

    def branch_commit(self, name: str) -> str:
        """Resolve a branch name to its commit fingerprint.

        Raises:
            BranchNotFound: If no such branch exists.
            EmptyBranch: If the branch holds no commit.
        """
        raw = self.store.get(BRANCH_REF % name)
        if raw is None:
            raise BranchNotFound(name)
        commit_hash = raw.decode("utf-8").strip()
        if not commit_hash:
            raise EmptyBranch(name)
        return commit_hash

    def list_branches(self) -> list[str]:
        """List all branch names in the repository."""
        self._require_repo()
        prefix = BRANCH_REF.replace("%s", "")
        return sorted(
            key[len(prefix):]
            for key in self.store.keys()
            if key.startswith(prefix) and key[len(prefix):]
        )

    def checkout(self, name: str) -> CheckoutResult:
        """Write the files of branch ``name``'s commit and move HEAD there.

        Existing working files are overwritten without any check for
        local modifications. Files whose blob is missing, or that can't
        be written, are skipped.

        Raises:
            BranchNotFound, EmptyBranch, CommitNotFound: Nothing is
                written and HEAD does not move.
        """
        self._require_repo()
        commit_hash = self.branch_commit(name)
        record = load_commit(self.objects, commit_hash)
        written, skipped = self._materialize(record)
        self.store.set(HEAD_KEY, commit_hash.encode("utf-8"))
        logger.info("Checked out branch %s at %s", name, commit_hash)
        return CheckoutResult(commit=commit_hash, written=written, skipped=skipped)

    def merge(self, name: str) -> MergeResult:
        """Overwrite the working set with branch ``name``'s files and commit.

        No three-way comparison and no conflict detection: every file
        of the branch's commit replaces the local copy, is restaged, and
        the result is committed on top of the current HEAD with a single
        parent.

        Raises:
            BranchNotFound, EmptyBranch, CommitNotFound: As for checkout.
            NothingStaged: If none of the branch's blobs could be found.
        """
        self._require_repo()
        commit_hash = self.branch_commit(name)
        record = load_commit(self.objects, commit_hash)
        logger.info("Merging branch %s (%s)", name, commit_hash)

        self.index.clear()
        written, skipped = self._materialize(record, restage=True)
        new_commit = self.commit(f"Merged branch {name}")
        return MergeResult(
            commit=new_commit,
            source_branch=name,
            written=written,
            skipped=skipped,
        )

    def _materialize(
        self, record: Commit, *, restage: bool = False
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Write a commit's blobs into the working set, in file-list order."""
        written: list[str] = []
        skipped: list[str] = []
        for entry in record.files:
            content = self.objects.get(entry.blob)
            if content is None:
                logger.warning(
                    "Blob %s for file '%s' is missing, skipping",
                    entry.blob,
                    entry.path,
                )
                skipped.append(entry.path)
                continue
            try:
                self.working.write(entry.path, content)
            except WriteFailed as e:
                logger.warning("%s, skipping", e)
                skipped.append(entry.path)
                continue
            if restage:
                self.index.append(entry)
            written.append(entry.path)
        return tuple(written), tuple(skipped)

    # -- History / diff --

    def log(self) -> Iterator[tuple[str, Commit]]:
        """Yield ``(commit_hash, commit)`` from HEAD back to the root commit.

        Raises:
            CommitNotFound: During iteration, when a record is missing.
        """
        self._require_repo()
        return history(self.objects, self.head)

    def diff(self, commit_a: str, commit_b: str) -> list[FileDiff]:
        """Positional line diff between the files of two commits."""
        self._require_repo()
        return diff_commits(self.objects, commit_a, commit_b)
