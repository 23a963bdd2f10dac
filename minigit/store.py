"""Repository factory function."""

import os
from pathlib import Path
from typing import Literal

from .errors import NotInitialized
from .kv.memory import Memory
from .repository import Repository
from .working import WorkingSet

DEFAULT_REPO_DIR = ".minigit"


def repository(
    kind: Literal["memory", "disk"] = "disk",
    *,
    root: str | Path = ".",
    repo_dir: str = DEFAULT_REPO_DIR,
    create: bool = False,
) -> Repository:
    """Open a Repository with sensible defaults.

    Args:
        kind: ``"disk"`` (default) keeps state in ``<root>/<repo_dir>``
            through diskcache. ``"memory"`` keeps it in process.
        root: Working-set directory. Tracked paths are relative to it.
        repo_dir: Name of the state directory under ``root``.
        create: Allow creating the state directory. Without it, opening
            a disk repository that doesn't exist raises.

    Returns:
        A ``Repository`` instance. Call ``init()`` on a fresh one.

    Raises:
        NotInitialized: If ``kind="disk"``, ``create`` is False and the
            state directory is missing.
    """
    working = WorkingSet(root)
    if kind == "memory":
        return Repository(Memory(), working)
    if kind == "disk":
        directory = os.path.join(os.fspath(root), repo_dir)
        if not create and not os.path.isdir(directory):
            raise NotInitialized(directory)
        from .kv.disk import Disk

        return Repository(Disk(directory), working, location=directory)
    raise ValueError(f"Unknown kind: {kind!r}")
