"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path

import pytest
from git import Actor, Commit, Repo

from src.shared_utilities import get_logging_manager

AUTHOR = Actor("Test Author", "author@example.com")
BASE_TIMESTAMP = 1_600_000_000


class RepoBuilder:
    """Builds a throwaway git repository one commit at a time."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        self.timestamp = BASE_TIMESTAMP

    def commit(
        self,
        files: dict[str, str | bytes | None] | None = None,
        message: str = "update",
        parent_commits: list[Commit] | None = None,
    ) -> Commit:
        """Write (or delete, for None) files and commit them one minute later."""
        for rel_path, content in (files or {}).items():
            target = self.path / rel_path
            if content is None:
                self.repo.index.remove([rel_path], working_tree=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
            self.repo.index.add([rel_path])

        self.timestamp += 60
        date = f"{self.timestamp} +0000"
        return self.repo.index.commit(
            message,
            parent_commits=parent_commits,
            author=AUTHOR,
            committer=AUTHOR,
            author_date=date,
            commit_date=date,
        )

    def merge(
        self,
        other: Commit,
        files: dict[str, str | bytes | None],
        message: str = "merge",
    ) -> Commit:
        """Commit the resolved files as a merge of ``other`` into HEAD."""
        return self.commit(files, message, parent_commits=[self.repo.head.commit, other])

    def close(self) -> None:
        self.repo.close()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop log sinks bound to streams a test may have swapped out."""
    yield
    get_logging_manager().reset()


@pytest.fixture
def repo_builder(tmp_path):
    """Empty git repository with a commit helper."""
    builder = RepoBuilder(tmp_path / "repo")
    yield builder
    builder.close()


def composer_lock(packages: dict[str, str]) -> str:
    """Render a composer.lock document from a name to version mapping."""
    return json.dumps(
        {
            "packages": [
                {"name": name, "version": version}
                for name, version in packages.items()
            ]
        },
        indent=4,
    )


@pytest.fixture
def composer_content():
    return composer_lock
