"""
Core lock history tracking functionality.
"""

import time
from pathlib import Path, PurePosixPath

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from ..shared_utilities import (
    get_logger,
    get_logging_manager,
    get_telemetry_manager,
    trace_function,
    trace_operation,
)
from .data_models import LockHistoryResult
from .errors import LockHistoryError, RepositoryOpenError
from .history_filter import iter_commits_for_file
from .lock_formats import LockFormatRegistry, get_default_registry
from .sampler import VersionSampler
from .timeline import compact_timeline


class LockHistoryTracker:
    """
    Reconstructs the version timeline of a library from a lock file's history.

    Walks the local repository only; the repository handle is held for the
    lifetime of the tracker and released by ``close()``.
    """

    def __init__(
        self,
        repo_path: str | Path | None = None,
        registry: LockFormatRegistry | None = None,
    ):
        """Initialize tracker.

        Args:
            repo_path: Repository path or any directory inside it. None uses
                GIT_DIR or the current directory.
            registry: Lock format registry, defaults to the built-in formats

        Raises:
            RepositoryOpenError: If no repository can be opened
        """
        self.logger = get_logger(__name__)
        self.registry = registry or get_default_registry()

        try:
            self.repo = Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryOpenError(
                f"Not a git repository: {repo_path or Path.cwd()}"
            ) from e

    def __enter__(self) -> "LockHistoryTracker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the repository's helper processes."""
        self.repo.close()

    @property
    def repo_path(self) -> str:
        return str(self.repo.working_tree_dir or self.repo.git_dir)

    def resolve_lock_path(self, lock_file: str | Path) -> str:
        """Return the lock file path relative to the repository root.

        Raises:
            LockHistoryError: If an absolute path lies outside the working tree
        """
        path = Path(lock_file)
        if path.is_absolute():
            if self.repo.working_tree_dir is None:
                raise LockHistoryError(
                    f"Absolute lock file path in a bare repository: {lock_file}"
                )
            root = Path(self.repo.working_tree_dir).resolve()
            try:
                path = path.resolve().relative_to(root)
            except ValueError as e:
                raise LockHistoryError(
                    f"{lock_file} is outside the repository {root}"
                ) from e
        return PurePosixPath(*path.parts).as_posix()

    @trace_function("analyze_lock_history", include_args=True)
    def analyze(
        self, lock_file: str | Path, library: str, rev: str = "HEAD"
    ) -> LockHistoryResult:
        """
        Build the version timeline of a library in a lock file.

        Args:
            lock_file: Lock file path, absolute or repository-relative
            library: Package name as written in the lock file
            rev: Revision to walk back from

        Returns:
            LockHistoryResult with chronological timeline entries

        Raises:
            LockHistoryError: If the lock format is unsupported or the history
                walk fails
        """
        file_path = self.resolve_lock_path(lock_file)
        file_name = PurePosixPath(file_path).name

        lock_format = self.registry.guess_format(file_name)
        if lock_format is None:
            supported = ", ".join(self.registry.get_supported_file_names())
            raise LockHistoryError(
                f"Unsupported lock file '{file_name}' (supported: {supported})"
            )

        self.logger.info(f"Analyzing {library} in {file_path} ({lock_format.name})")
        logging_manager = get_logging_manager()
        telemetry = get_telemetry_manager()
        logging_manager.log_operation_start(
            "analyze_lock_history", lock_file=file_path, library=library, rev=rev
        )
        start = time.time()

        try:
            with trace_operation(
                "sample_lock_history",
                {"lock_file": file_path, "library": library, "rev": rev},
            ) as span:
                sampler = VersionSampler(file_path, library, registry=self.registry)
                commits = iter_commits_for_file(self.repo, file_path, rev=rev)
                samples = list(sampler.iter_samples(commits))
                entries = compact_timeline(samples)

                telemetry.set_attribute(span, "sampled_commits", len(samples))
                telemetry.set_attribute(span, "skipped_commits", len(sampler.skipped))
                telemetry.set_attribute(span, "timeline_entries", len(entries))
        except LockHistoryError as e:
            logging_manager.log_operation_error(
                "analyze_lock_history", e, lock_file=file_path, library=library
            )
            raise

        duration = time.time() - start
        logging_manager.log_operation_complete(
            "analyze_lock_history",
            duration,
            entries=len(entries),
            sampled_commits=len(samples),
            skipped_commits=len(sampler.skipped),
        )

        return LockHistoryResult(
            repo_path=self.repo_path,
            lock_file=file_path,
            library=library,
            entries=entries,
            metadata={
                "analysis_date": time.strftime("%Y-%m-%d %H:%M:%S"),
                "lock_format": lock_format.name,
                "rev": rev,
                "qualifying_commits": len(samples) + len(sampler.skipped),
                "sampled_commits": len(samples),
                "skipped_commits": len(sampler.skipped),
                "skipped": [
                    {
                        "commit_sha": outcome.commit_sha,
                        "reason": str(outcome.error),
                        "error_type": type(outcome.error).__name__,
                    }
                    for outcome in sampler.skipped
                ],
                "duration_seconds": round(duration, 3),
            },
        )
