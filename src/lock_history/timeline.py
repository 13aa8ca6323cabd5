"""
Compaction of version samples into a version-change timeline.
"""

from collections.abc import Iterable

from .data_models import TimelineEntry, VersionSample

_UNSET = object()


def compact_timeline(samples: Iterable[VersionSample]) -> list[TimelineEntry]:
    """
    Collapse newest-first samples into chronological version-change entries.

    Each entry carries the timestamp of the oldest sample in its run. A
    missing version (None) is a state of its own, so the library disappearing
    and reappearing produces separate entries.
    """
    entries: list[TimelineEntry] = []
    current: object = _UNSET

    for sample in reversed(list(samples)):
        if sample.version == current:
            continue
        entries.append(
            TimelineEntry(
                version=sample.version,
                timestamp=sample.timestamp,
                commit_sha=sample.commit_sha,
            )
        )
        current = sample.version

    return entries
