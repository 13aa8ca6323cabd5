"""
Commit history filtering for a single file path.
"""

from collections.abc import Iterator

from git import Commit, Repo
from git.exc import GitError, ODBError

from ..shared_utilities import get_logger
from .errors import HistoryWalkError

logger = get_logger(__name__)


def commit_touches_path(commit: Commit, file_path: str) -> bool:
    """Return True if the commit changed the path relative to its first parent.

    Root commits always count as touching the path. Parents beyond the first
    are ignored.
    """
    if not commit.parents:
        return True

    first_parent = commit.parents[0]
    diff = first_parent.diff(commit, paths=[file_path])
    return len(diff) > 0


def iter_commits_for_file(
    repo: Repo, file_path: str, rev: str = "HEAD"
) -> Iterator[Commit]:
    """
    Walk history from ``rev`` newest first, yielding commits that changed a path.

    Args:
        repo: Open repository
        file_path: Repository-relative path of the file
        rev: Revision to start the walk from

    Yields:
        Qualifying commits in descending commit-time order

    Raises:
        HistoryWalkError: If any commit, tree or diff cannot be resolved
    """
    try:
        for commit in repo.iter_commits(rev, date_order=True):
            if commit_touches_path(commit, file_path):
                logger.debug(f"Commit {commit.hexsha[:8]} touches {file_path}")
                yield commit
    except (GitError, ODBError, ValueError) as e:
        raise HistoryWalkError(
            f"Failed to walk history of {file_path} from {rev}: {e}"
        ) from e
