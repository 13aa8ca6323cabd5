"""
Output formatting for lock history results.
"""

import csv
import json
from io import StringIO

from .data_models import LockHistoryResult, TimelineEntry

ABSENT_LABEL = "(absent)"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LockHistoryFormatter:
    """Renders a lock history result as table, CSV or JSON."""

    def format_table_output(
        self, result: LockHistoryResult, show_skipped: bool = False
    ) -> str:
        """Format result as a table for console display."""
        lines = [
            f"📦 Version History: {result.library}",
            f"Lock File: {result.lock_file}",
            f"Repository: {result.repo_path}",
            "=" * 60,
        ]

        if not result.entries:
            lines.append(f"No entries found for {result.library}")
        else:
            width = max(len(self._version_label(e)) for e in result.entries)
            for entry in result.entries:
                sha = (entry.commit_sha or "")[:8]
                lines.append(
                    f"  {self._version_label(entry):<{width}}  "
                    f"{entry.timestamp.strftime(DATE_FORMAT)}  {sha}".rstrip()
                )

        skipped = result.metadata.get("skipped", [])
        if show_skipped and skipped:
            lines.append("")
            lines.append(f"Skipped Commits ({len(skipped)}):")
            lines.append("-" * 40)
            for item in skipped:
                lines.append(f"  {item['commit_sha'][:8]}  {item['reason']}")

        return "\n".join(lines)

    def format_csv_output(self, result: LockHistoryResult) -> str:
        """Format result as CSV."""
        output = StringIO()
        writer = csv.writer(output)

        writer.writerow(["version", "date", "commit"])
        for entry in result.entries:
            writer.writerow(
                [
                    self._version_label(entry),
                    entry.timestamp.isoformat(),
                    entry.commit_sha or "",
                ]
            )

        return output.getvalue()

    def format_json_output(self, result: LockHistoryResult) -> str:
        """Format result as JSON."""
        output_data = {
            "repository": result.repo_path,
            "lock_file": result.lock_file,
            "library": result.library,
            "entries": [
                {
                    "version": entry.version,
                    "date": entry.timestamp.isoformat(),
                    "commit": entry.commit_sha,
                }
                for entry in result.entries
            ],
            "metadata": result.metadata,
        }

        return json.dumps(output_data, indent=2)

    def format(
        self,
        result: LockHistoryResult,
        format_type: str = "table",
        show_skipped: bool = False,
    ) -> str:
        """Format result in the requested output format."""
        if format_type == "table":
            return self.format_table_output(result, show_skipped=show_skipped)
        if format_type == "csv":
            return self.format_csv_output(result)
        if format_type == "json":
            return self.format_json_output(result)
        raise ValueError(f"Unsupported format: {format_type}")

    def save_to_file(
        self,
        result: LockHistoryResult,
        output_path: str,
        format_type: str = "json",
        show_skipped: bool = False,
    ) -> None:
        """Save formatted output to file."""
        content = self.format(result, format_type, show_skipped=show_skipped)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

    def _version_label(self, entry: TimelineEntry) -> str:
        return entry.version if entry.version is not None else ABSENT_LABEL
