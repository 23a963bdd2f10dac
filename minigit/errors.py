"""minigit error types."""


class MinigitError(Exception):
    """Base class for every error the repository reports to the user."""


class NotInitialized(MinigitError):
    """Raised when no repository exists at the configured location."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Not a minigit repository: {location}")


class FileNotFound(MinigitError):
    """Raised when a working-set file cannot be read."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File '{path}' not found.")


class NothingStaged(MinigitError):
    """Raised when committing with an empty staging index."""

    def __init__(self) -> None:
        super().__init__("No files staged. Commit aborted.")


class NoCommits(MinigitError):
    """Raised when an operation needs HEAD but nothing was committed yet."""

    def __init__(self) -> None:
        super().__init__("No commits yet. Cannot create branch.")


class BranchExists(MinigitError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' already exists.")


class BranchNotFound(MinigitError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' does not exist.")


class EmptyBranch(MinigitError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' has no commits.")


class CommitNotFound(MinigitError):
    """Raised when a commit record is missing from the object store.

    Attributes:
        commit_hash: The fingerprint that could not be resolved.
    """

    def __init__(self, commit_hash: str) -> None:
        self.commit_hash = commit_hash
        super().__init__(f"Commit {commit_hash} not found.")


class BlobNotFound(MinigitError):
    """Raised when a file's blob is missing from the object store.

    Checkout, merge and diff do not raise this: they record the
    error against the file and carry on with the rest.
    """

    def __init__(self, path: str, blob_hash: str) -> None:
        self.path = path
        self.blob_hash = blob_hash
        super().__init__(f"Blob {blob_hash} for file '{path}' is missing.")


class InvalidPath(MinigitError):
    """Raised when a path can't be tracked, e.g. it contains a line break."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path {path!r} can't be tracked: line breaks are not allowed.")


class WriteFailed(MinigitError):
    """Raised when a working-set file can't be written.

    Checkout and merge record this against the file and carry on.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write '{path}': {reason}")
