"""Commit records and their text serialization."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, NamedTuple

FILES_MARKER = "files:"


class FileEntry(NamedTuple):
    """One tracked file: its path and the fingerprint of its blob."""

    path: str
    blob: str

    def to_line(self) -> str:
        return f"{self.path} {self.blob}"

    @classmethod
    def from_line(cls, line: str) -> FileEntry:
        """Parse ``<path> <fingerprint>``. The path may contain spaces."""
        path, sep, blob = line.rstrip("\r\n").rpartition(" ")
        if not sep or not path or not blob:
            raise ValueError(f"Malformed file entry: {line!r}")
        return cls(path, blob)


def parse_entries(text: str) -> list[FileEntry]:
    """Parse newline-separated file entries, skipping blank lines."""
    return [FileEntry.from_line(line) for line in text.splitlines() if line.strip()]


def format_entries(entries: Iterable[FileEntry]) -> str:
    return "".join(entry.to_line() + "\n" for entry in entries)


@dataclass(frozen=True)
class Commit:
    """An immutable snapshot record.

    Attributes:
        message: Free text, may be empty or span several lines.
        parent: Fingerprint of the previous commit, None for a root.
        timestamp: Human-readable creation time. Informational only.
        files: Entries copied verbatim from the staging index.
    """

    message: str
    parent: str | None
    timestamp: str
    files: tuple[FileEntry, ...]

    @classmethod
    def create(
        cls,
        message: str,
        parent: str | None,
        files: Iterable[FileEntry],
        *,
        timestamp: str | None = None,
    ) -> Commit:
        files = tuple(files)
        if not files:
            raise ValueError("A commit needs at least one file entry")
        return cls(
            message=message,
            parent=parent or None,
            timestamp=timestamp if timestamp is not None else time.ctime(),
            files=files,
        )

    def file_map(self) -> dict[str, str]:
        """Path -> blob fingerprint. Later duplicates of a path win."""
        return {entry.path: entry.blob for entry in self.files}

    def serialize(self) -> bytes:
        first, *rest = self.message.split("\n")
        lines = [f"message: {first}"]
        # Continuation lines carry a leading space so they can't be
        # mistaken for a header.
        lines.extend(f" {line}" for line in rest)
        if self.parent:
            lines.append(f"parent: {self.parent}")
        lines.append(f"timestamp: {self.timestamp}")
        lines.append(FILES_MARKER)
        return ("\n".join(lines) + "\n" + format_entries(self.files)).encode("utf-8")

    @classmethod
    def parse(cls, raw: bytes) -> Commit:
        """Parse a serialized commit record.

        Raises:
            ValueError: If ``raw`` is not a commit record (e.g. a blob).
        """
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError("Not a commit record") from e

        lines = text.split("\n")
        if FILES_MARKER not in lines:
            raise ValueError("Not a commit record: no files section")
        marker = lines.index(FILES_MARKER)

        message_lines: list[str] = []
        parent: str | None = None
        timestamp = ""
        for line in lines[:marker]:
            if line.startswith("message: "):
                message_lines = [line[len("message: "):]]
            elif line.startswith(" ") and message_lines:
                message_lines.append(line[1:])
            elif line.startswith("parent: "):
                parent = line[len("parent: "):].strip() or None
            elif line.startswith("timestamp: "):
                timestamp = line[len("timestamp: "):]
            elif line:
                raise ValueError(f"Unexpected header line: {line!r}")

        files = tuple(parse_entries("\n".join(lines[marker + 1:])))
        return cls(
            message="\n".join(message_lines),
            parent=parent,
            timestamp=timestamp,
            files=files,
        )


def is_commit_record(raw: bytes) -> bool:
    """Whether ``raw`` looks like a serialized commit (has a files section)."""
    return (FILES_MARKER + "\n").encode() in raw and raw.startswith(b"message: ")
