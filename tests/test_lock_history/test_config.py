"""Tests for lock history configuration."""

import pytest

from src.lock_history.config import HistoryConfig


class TestHistoryConfig:
    """Test HistoryConfig dataclass."""

    def test_default_initialization(self):
        config = HistoryConfig(library="acme/foo")

        assert config.library == "acme/foo"
        assert config.lock_file == "composer.lock"
        assert config.repo_path is None
        assert config.rev == "HEAD"
        assert config.output_format == "table"

    def test_custom_initialization(self):
        config = HistoryConfig(
            library="serde",
            lock_file="Cargo.lock",
            repo_path="/work/crate",
            rev="release",
            output_format="json",
        )

        assert config.lock_file == "Cargo.lock"
        assert config.repo_path == "/work/crate"
        assert config.rev == "release"
        assert config.output_format == "json"

    @pytest.mark.parametrize("library", ["", "   "])
    def test_empty_library_rejected(self, library):
        with pytest.raises(ValueError, match="library"):
            HistoryConfig(library=library)

    def test_empty_lock_file_rejected(self):
        with pytest.raises(ValueError):
            HistoryConfig(library="acme/foo", lock_file="")

    def test_unknown_output_format_rejected(self):
        with pytest.raises(ValueError, match="Unsupported output format"):
            HistoryConfig(library="acme/foo", output_format="yaml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_LIBRARY", "lodash")
        monkeypatch.setenv("LOCK_HISTORY_LOCK_FILE", "web/package-lock.json")
        monkeypatch.setenv("LOCK_HISTORY_REPO", "/work/web")
        monkeypatch.setenv("LOCK_HISTORY_FORMAT", "csv")
        monkeypatch.delenv("LOCK_HISTORY_REV", raising=False)

        config = HistoryConfig.from_env()

        assert config.library == "lodash"
        assert config.lock_file == "web/package-lock.json"
        assert config.repo_path == "/work/web"
        assert config.rev == "HEAD"
        assert config.output_format == "csv"

    def test_from_env_library_override(self, monkeypatch):
        monkeypatch.delenv("LOCK_HISTORY_LIBRARY", raising=False)
        monkeypatch.delenv("LOCK_HISTORY_LOCK_FILE", raising=False)
        monkeypatch.delenv("LOCK_HISTORY_REPO", raising=False)
        monkeypatch.delenv("LOCK_HISTORY_FORMAT", raising=False)

        config = HistoryConfig.from_env(library="acme/foo")

        assert config.library == "acme/foo"
        assert config.lock_file == "composer.lock"
        assert config.repo_path is None

    def test_from_env_without_library(self, monkeypatch):
        monkeypatch.delenv("LOCK_HISTORY_LIBRARY", raising=False)

        with pytest.raises(ValueError):
            HistoryConfig.from_env()

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_LIBRARY", "lodash")
        monkeypatch.setenv("LOCK_HISTORY_FORMAT", "csv")
        monkeypatch.setenv("LOCK_HISTORY_REV", "release")

        config = HistoryConfig.from_env(library="acme/foo", rev=None, output_format="json")

        assert config.library == "acme/foo"
        assert config.rev == "release"
        assert config.output_format == "json"

    def test_from_env_rejects_unknown_format(self, monkeypatch):
        monkeypatch.setenv("LOCK_HISTORY_FORMAT", "yaml")

        with pytest.raises(ValueError, match="Unsupported output format"):
            HistoryConfig.from_env(library="acme/foo")
