"""Positional line diff between the file sets of two commits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from .graph import load_commit
from .objects import ObjectStore

logger = logging.getLogger(__name__)

FileStatus = Literal["added", "removed", "changed", "unchanged", "unavailable"]


@dataclass(frozen=True)
class LineChange:
    """A single reported line. ``kind`` is ``"-"`` or ``"+"``."""

    kind: Literal["-", "+"]
    index: int
    text: str


@dataclass(frozen=True)
class FileDiff:
    """Differences for one path between commit A and commit B."""

    path: str
    status: FileStatus
    changes: tuple[LineChange, ...] = ()

    @property
    def removed(self) -> tuple[str, ...]:
        return tuple(c.text for c in self.changes if c.kind == "-")

    @property
    def added(self) -> tuple[str, ...]:
        return tuple(c.text for c in self.changes if c.kind == "+")


def split_lines(content: bytes) -> list[str]:
    """Split blob content into lines, without line terminators.

    A trailing newline does not start an extra empty line.
    """
    text = content.decode("utf-8", errors="replace")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def positional_changes(old: list[str], new: list[str]) -> tuple[LineChange, ...]:
    """Index-aligned comparison of two line lists.

    The shorter list is padded with empty lines. Every index whose
    lines differ yields a removed line followed by an added line. A
    single inserted line therefore reports every later line as changed.
    """
    changes: list[LineChange] = []
    for i in range(max(len(old), len(new))):
        a = old[i] if i < len(old) else ""
        b = new[i] if i < len(new) else ""
        if a != b:
            changes.append(LineChange("-", i, a))
            changes.append(LineChange("+", i, b))
    return tuple(changes)


def diff_commits(objects: ObjectStore, commit_a: str, commit_b: str) -> list[FileDiff]:
    """Compare the files of ``commit_a`` against those of ``commit_b``.

    Returns one ``FileDiff`` per path in the union of both file sets,
    sorted by path. A missing blob marks that file ``unavailable`` and
    the rest of the comparison continues.

    Raises:
        CommitNotFound: If either commit record is missing.
    """
    files_a = load_commit(objects, commit_a).file_map()
    files_b = load_commit(objects, commit_b).file_map()

    result: list[FileDiff] = []
    for path in sorted(files_a.keys() | files_b.keys()):
        blob_a = files_a.get(path)
        blob_b = files_b.get(path)

        if blob_a is not None and blob_b is not None and blob_a == blob_b:
            result.append(FileDiff(path, "unchanged"))
            continue

        content_a = objects.get(blob_a) if blob_a is not None else None
        content_b = objects.get(blob_b) if blob_b is not None else None
        if (blob_a is not None and content_a is None) or (
            blob_b is not None and content_b is None
        ):
            logger.warning("Blob for file '%s' is missing, skipping diff", path)
            result.append(FileDiff(path, "unavailable"))
            continue

        if content_b is None:
            lines = split_lines(content_a or b"")
            changes = tuple(LineChange("-", i, line) for i, line in enumerate(lines))
            result.append(FileDiff(path, "removed", changes))
        elif content_a is None:
            lines = split_lines(content_b)
            changes = tuple(LineChange("+", i, line) for i, line in enumerate(lines))
            result.append(FileDiff(path, "added", changes))
        elif content_a == content_b:
            result.append(FileDiff(path, "unchanged"))
        else:
            changes = positional_changes(split_lines(content_a), split_lines(content_b))
            # Differences only in a trailing newline leave no line changes
            result.append(FileDiff(path, "changed" if changes else "unchanged", changes))

    return result


def render_diff(diffs: Iterable[FileDiff]) -> str:
    """Format diffs as the text report shown by ``minigit diff``."""
    out: list[str] = []
    for file_diff in diffs:
        out.append(f"File: {file_diff.path}")
        if file_diff.status == "unchanged":
            out.append("  (no changes)")
        elif file_diff.status == "unavailable":
            out.append("  (blob missing, skipped)")
        else:
            out.extend(f"{c.kind} {c.text}" for c in file_diff.changes)
    return "\n".join(out) + "\n" if out else ""
