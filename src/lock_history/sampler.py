"""
Per-commit sampling of a library's locked version.
"""

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from pathlib import PurePosixPath

from git import Commit

from ..shared_utilities import get_logger
from .data_models import SampleOutcome, VersionSample
from .errors import (
    BlobNotFoundError,
    SampleError,
    UndecodableBlobError,
    UnsupportedLockFormatError,
)
from .lock_formats import LockFormatRegistry, get_default_registry


def commit_timestamp(commit: Commit) -> datetime:
    """Authored time of a commit as a naive UTC datetime."""
    return datetime.fromtimestamp(commit.authored_date, tz=UTC).replace(tzinfo=None)


class VersionSampler:
    """Reads the lock file at each commit and extracts the library version."""

    def __init__(
        self,
        file_path: str,
        library: str,
        registry: LockFormatRegistry | None = None,
    ):
        """Initialize sampler.

        Args:
            file_path: Repository-relative path of the lock file
            library: Package name to look up
            registry: Format registry, defaults to the built-in formats
        """
        self.logger = get_logger(__name__)
        self.file_path = file_path
        self.library = library
        self.registry = registry or get_default_registry()
        self.skipped: list[SampleOutcome] = []

    def _read_blob(self, commit: Commit) -> str:
        try:
            blob = commit.tree / self.file_path
        except KeyError as e:
            raise BlobNotFoundError(
                f"{self.file_path} not found in {commit.hexsha[:8]}"
            ) from e

        if blob.type != "blob":
            raise BlobNotFoundError(
                f"{self.file_path} is not a file in {commit.hexsha[:8]}"
            )

        try:
            return blob.data_stream.read().decode("utf-8")
        except UnicodeDecodeError as e:
            raise UndecodableBlobError(
                f"{self.file_path} is not UTF-8 text in {commit.hexsha[:8]}"
            ) from e

    def sample(self, commit: Commit) -> SampleOutcome:
        """Sample one commit, capturing per-commit failures in the outcome."""
        try:
            content = self._read_blob(commit)

            lock_format = self.registry.guess_format(PurePosixPath(self.file_path).name)
            if lock_format is None:
                raise UnsupportedLockFormatError(
                    f"Unsupported lock file: {self.file_path}"
                )

            version = lock_format.extract_version(content, self.library)
        except SampleError as e:
            return SampleOutcome(commit_sha=commit.hexsha, error=e)

        return SampleOutcome(
            commit_sha=commit.hexsha,
            sample=VersionSample(
                version=version,
                timestamp=commit_timestamp(commit),
                commit_sha=commit.hexsha,
            ),
        )

    def iter_samples(self, commits: Iterable[Commit]) -> Iterator[VersionSample]:
        """
        Sample each commit in order, dropping commits that fail.

        Dropped outcomes are logged and kept in ``self.skipped``. Errors raised
        by the commit iterator itself propagate.
        """
        for commit in commits:
            outcome = self.sample(commit)
            if outcome.ok:
                yield outcome.sample
                continue

            self.skipped.append(outcome)
            self.logger.bind(
                commit=outcome.commit_sha, error_type=type(outcome.error).__name__
            ).warning("Skipping commit {}: {}", outcome.commit_sha[:8], outcome.error)
