"""
Configuration for lock history analysis.
"""

import os
from dataclasses import dataclass

OUTPUT_FORMATS = ("table", "csv", "json")


@dataclass
class HistoryConfig:
    """Configuration for one lock history run."""

    library: str
    lock_file: str = "composer.lock"
    repo_path: str | None = None
    rev: str = "HEAD"
    output_format: str = "table"

    def __post_init__(self):
        """Validate settings."""
        if not self.library or not self.library.strip():
            raise ValueError("library name must not be empty")
        if not self.lock_file:
            raise ValueError("lock file path must not be empty")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output format: {self.output_format} "
                f"(expected one of {', '.join(OUTPUT_FORMATS)})"
            )

    @classmethod
    def from_env(cls, **overrides: str | None) -> "HistoryConfig":
        """Build a configuration from LOCK_HISTORY_* environment variables.

        Args:
            **overrides: Field values that take precedence over the
                environment; None keeps the environment value
        """
        settings = {
            "library": os.getenv("LOCK_HISTORY_LIBRARY", ""),
            "lock_file": os.getenv("LOCK_HISTORY_LOCK_FILE", "composer.lock"),
            "repo_path": os.getenv("LOCK_HISTORY_REPO") or None,
            "rev": os.getenv("LOCK_HISTORY_REV", "HEAD"),
            "output_format": os.getenv("LOCK_HISTORY_FORMAT", "table"),
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)
