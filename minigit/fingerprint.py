"""Content fingerprints used as object store keys."""

import hashlib

FINGERPRINT_LENGTH = 16


def fingerprint(data: bytes) -> str:
    """Return a deterministic 16-hex-char identifier for ``data``.

    Stable across processes, so blobs written in one run can be looked
    up in the next. Not meant to resist deliberate collisions.
    """
    return hashlib.sha256(data).hexdigest()[:FINGERPRINT_LENGTH]
