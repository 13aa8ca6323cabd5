"""
Data models for lock file version history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .errors import SampleError


@dataclass(frozen=True)
class LockRecord:
    """One package entry parsed from a lock file."""

    name: str
    version: str | None


@dataclass(frozen=True)
class VersionSample:
    """Version of the library observed at one qualifying commit."""

    version: str | None
    timestamp: datetime
    commit_sha: str | None = None


@dataclass(frozen=True)
class TimelineEntry:
    """Start of a consecutive run of one version in history."""

    version: str | None
    timestamp: datetime
    commit_sha: str | None = None


@dataclass(frozen=True)
class SampleOutcome:
    """Result of sampling one commit: either a sample or the reason it failed."""

    commit_sha: str
    sample: VersionSample | None = None
    error: SampleError | None = None

    def __post_init__(self):
        if (self.sample is None) == (self.error is None):
            raise ValueError("SampleOutcome needs exactly one of sample or error")

    @property
    def ok(self) -> bool:
        return self.sample is not None


@dataclass
class LockHistoryResult:
    """Complete result from a lock history analysis."""

    repo_path: str
    lock_file: str
    library: str
    entries: list[TimelineEntry]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_version(self) -> str | None:
        """Version held at the newest timeline entry."""
        if not self.entries:
            return None
        return self.entries[-1].version
