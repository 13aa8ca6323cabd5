"""
Exception hierarchy for lock history analysis.

Two independent families: ``LockHistoryError`` aborts the whole run, while
``SampleError`` only invalidates the sample taken at a single commit.
"""


class LockHistoryError(Exception):
    """Base exception for fatal lock history failures."""

    pass


class RepositoryOpenError(LockHistoryError):
    """The repository could not be opened or has no usable head."""

    pass


class HistoryWalkError(LockHistoryError):
    """A commit, tree or path-scoped diff could not be resolved."""

    pass


class SampleError(Exception):
    """Base exception for failures confined to a single commit."""

    pass


class BlobNotFoundError(SampleError):
    """The lock file is absent from the commit's tree."""

    pass


class UndecodableBlobError(SampleError):
    """The lock file blob is not valid UTF-8 text."""

    pass


class LockFileParseError(SampleError):
    """The lock file content does not match its format."""

    pass


class UnsupportedLockFormatError(SampleError):
    """No lock format is registered for the file name."""

    pass
