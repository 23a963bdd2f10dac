"""minigit: a minimal local version-control engine."""

from .commit import Commit, FileEntry
from .diff import FileDiff, LineChange, diff_commits, render_diff
from .errors import (
    BlobNotFound,
    BranchExists,
    BranchNotFound,
    CommitNotFound,
    EmptyBranch,
    FileNotFound,
    InvalidPath,
    MinigitError,
    NoCommits,
    NotInitialized,
    NothingStaged,
    WriteFailed,
)
from .fingerprint import fingerprint
from .graph import history, load_commit
from .index import StagingIndex
from .kv.base import KVStore
from .objects import ObjectStore
from .repository import CheckoutResult, MergeResult, Repository
from .store import repository
from .working import WorkingSet

__version__ = "0.1.0"

__all__ = [
    "BlobNotFound",
    "BranchExists",
    "BranchNotFound",
    "CheckoutResult",
    "Commit",
    "CommitNotFound",
    "EmptyBranch",
    "FileDiff",
    "FileEntry",
    "FileNotFound",
    "InvalidPath",
    "KVStore",
    "LineChange",
    "MergeResult",
    "MinigitError",
    "NoCommits",
    "NotInitialized",
    "NothingStaged",
    "ObjectStore",
    "Repository",
    "StagingIndex",
    "WorkingSet",
    "WriteFailed",
    "diff_commits",
    "fingerprint",
    "history",
    "load_commit",
    "render_diff",
    "repository",
]
