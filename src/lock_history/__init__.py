"""
Lock file version history toolkit.

Reconstructs when each version of a library entered a lock file by walking
the local commit history.
"""

from .config import HistoryConfig
from .core import LockHistoryTracker
from .data_models import LockHistoryResult, TimelineEntry, VersionSample
from .errors import LockHistoryError, SampleError
from .lock_formats import LockFormat, LockFormatRegistry, guess_format
from .timeline import compact_timeline

__all__ = [
    "LockHistoryTracker",
    "HistoryConfig",
    "LockHistoryResult",
    "TimelineEntry",
    "VersionSample",
    "LockHistoryError",
    "SampleError",
    "LockFormat",
    "LockFormatRegistry",
    "guess_format",
    "compact_timeline",
]
