"""
Lock file formats and the registry that selects them by file name.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from typing import Any

from .data_models import LockRecord
from .errors import LockFileParseError


class LockFormat(ABC):
    """Abstract base class for all lock file formats."""

    name: str = ""
    file_name: str = ""

    @classmethod
    def guess_from_name(cls, file_name: str) -> bool:
        """Return True if the bare file name belongs to this format."""
        return file_name == cls.file_name

    @abstractmethod
    def parse_records(self, content: str) -> list[LockRecord]:
        """Parse lock file content into package records."""
        pass

    def extract_version(self, content: str, library: str) -> str | None:
        """Return the locked version of the library, or None if it is absent."""
        for record in self.parse_records(content):
            if record.name == library:
                return record.version
        return None


def _require_record(entry: Any, source: str) -> LockRecord:
    if not isinstance(entry, dict):
        raise LockFileParseError(f"{source}: package record is not a mapping")

    name = entry.get("name")
    version = entry.get("version")
    if not isinstance(name, str):
        raise LockFileParseError(f"{source}: package record without a name")
    if not isinstance(version, str):
        raise LockFileParseError(f"{source}: package {name!r} has no version")

    return LockRecord(name=name, version=version)


def _load_json_object(content: str, source: str) -> dict[str, Any]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LockFileParseError(f"{source}: invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LockFileParseError(f"{source}: top level must be an object")
    return data


class ComposerLockFormat(LockFormat):
    """Composer ``composer.lock``: JSON object with ``packages`` record lists."""

    name = "composer"
    file_name = "composer.lock"

    def parse_records(self, content: str) -> list[LockRecord]:
        data = _load_json_object(content, self.file_name)

        if "packages" not in data:
            raise LockFileParseError(f"{self.file_name}: missing 'packages' list")

        records = []
        # Dev packages come after runtime packages so the first match wins
        for key in ("packages", "packages-dev"):
            entries = data.get(key)
            if entries is None and key == "packages-dev":
                continue
            if not isinstance(entries, list):
                raise LockFileParseError(f"{self.file_name}: '{key}' must be a list")
            records.extend(_require_record(e, self.file_name) for e in entries)

        return records


class CargoLockFormat(LockFormat):
    """Cargo ``Cargo.lock``: TOML array of ``[[package]]`` tables."""

    name = "cargo"
    file_name = "Cargo.lock"

    def parse_records(self, content: str) -> list[LockRecord]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise LockFileParseError(f"{self.file_name}: invalid TOML: {e}") from e

        # Every Cargo.lock carries at least the root crate's own entry
        if "package" not in data:
            raise LockFileParseError(f"{self.file_name}: missing 'package' array")

        entries = data["package"]
        if not isinstance(entries, list):
            raise LockFileParseError(f"{self.file_name}: 'package' must be an array")

        return [_require_record(e, self.file_name) for e in entries]


class NpmLockFormat(LockFormat):
    """npm ``package-lock.json``: ``packages`` mapping keyed by install path."""

    name = "npm"
    file_name = "package-lock.json"
    namespace_prefix = "node_modules/"

    def _package_map(self, content: str) -> tuple[dict[str, Any], str]:
        data = _load_json_object(content, self.file_name)

        if "packages" in data:
            packages = data["packages"]
            prefix = self.namespace_prefix
        elif "dependencies" in data:
            # lockfileVersion 1 keys dependencies by bare name
            packages = data["dependencies"]
            prefix = ""
        else:
            raise LockFileParseError(
                f"{self.file_name}: missing 'packages' or 'dependencies' mapping"
            )

        if not isinstance(packages, dict):
            raise LockFileParseError(f"{self.file_name}: packages must be an object")
        return packages, prefix

    def _version_of(self, key: str, entry: Any) -> str | None:
        if not isinstance(entry, dict):
            raise LockFileParseError(f"{self.file_name}: entry {key!r} is not an object")

        version = entry.get("version")
        if version is not None and not isinstance(version, str):
            raise LockFileParseError(
                f"{self.file_name}: entry {key!r} has a non-string version"
            )
        return version

    def parse_records(self, content: str) -> list[LockRecord]:
        packages, prefix = self._package_map(content)

        records = []
        for key, entry in packages.items():
            # The root project is keyed by the empty path
            if not key.startswith(prefix) or key == prefix:
                continue
            records.append(
                LockRecord(name=key[len(prefix) :], version=self._version_of(key, entry))
            )
        return records

    def extract_version(self, content: str, library: str) -> str | None:
        packages, prefix = self._package_map(content)

        key = f"{prefix}{library}"
        if key not in packages:
            return None
        return self._version_of(key, packages[key])


class LockFormatRegistry:
    """Selects the lock format matching a lock file's name."""

    def __init__(self):
        self._formats: dict[str, type[LockFormat]] = {
            "composer": ComposerLockFormat,
            "cargo": CargoLockFormat,
            "npm": NpmLockFormat,
        }

    def guess_format(self, file_name: str) -> LockFormat | None:
        """Return the format for an exact, case-sensitive file name match."""
        for format_class in self._formats.values():
            if format_class.guess_from_name(file_name):
                return format_class()
        return None

    def register_format(self, format_class: type[LockFormat]) -> None:
        """Register a new lock format."""
        if not isinstance(format_class, type) or not issubclass(
            format_class, LockFormat
        ):
            raise ValueError("Format class must inherit from LockFormat")
        self._formats[format_class.name] = format_class

    def get_available_formats(self) -> list[str]:
        """Get list of registered format names."""
        return list(self._formats.keys())

    def get_supported_file_names(self) -> list[str]:
        """Get list of recognised lock file names."""
        return [f.file_name for f in self._formats.values()]


_default_registry = LockFormatRegistry()


def guess_format(file_name: str) -> LockFormat | None:
    """Map a bare file name to a lock format using the default registry."""
    return _default_registry.guess_format(file_name)


def get_default_registry() -> LockFormatRegistry:
    return _default_registry
