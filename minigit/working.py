"""The working set: live files the repository reads and writes."""

import logging
from pathlib import Path

from .errors import FileNotFound, WriteFailed

logger = logging.getLogger(__name__)


class WorkingSet:
    """Files on disk, addressed by paths relative to ``root``."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        return self.root / path

    def read(self, path: str) -> bytes:
        """Read a file's bytes.

        Raises:
            FileNotFound: If the file is missing or unreadable.
        """
        target = self.resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            raise FileNotFound(path) from e

    def write(self, path: str, content: bytes) -> None:
        """Write ``content`` to ``path``, replacing whatever is there.

        Raises:
            WriteFailed: If the file or its parent directory can't be written.
        """
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise WriteFailed(path, e.strerror or str(e)) from e
        logger.debug("Wrote %s (%d bytes)", path, len(content))
