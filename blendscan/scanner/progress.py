"""Progress reporting utilities for scanning."""

import sys

from blendscan.scanner.models import ScanSnapshot


class ProgressReporter:
    """Reports scan progress from poll snapshots to the user."""

    def __init__(self, interval: int = 25):
        self.interval = interval
        self._last_report_count = 0

    def report_if_needed(self, snapshot: ScanSnapshot) -> None:
        if snapshot.scanned_entries - self._last_report_count >= self.interval:
            self._print_progress(snapshot)
            self._last_report_count = snapshot.scanned_entries

    def report_completion(self, snapshot: ScanSnapshot) -> None:
        duration = format_duration(snapshot.elapsed_seconds)
        print(
            f"Scan complete: {snapshot.found_blends:,} .blend files in "
            f"{snapshot.scanned_entries:,} entries ({duration})",
            file=sys.stderr,
        )

    def report_cancelled(self, snapshot: ScanSnapshot) -> None:
        print(
            f"\nScan cancelled after {snapshot.scanned_entries:,} entries "
            f"({snapshot.found_blends:,} .blend files found)",
            file=sys.stderr,
        )

    def _print_progress(self, snapshot: ScanSnapshot) -> None:
        current = snapshot.current_path or ""
        print(
            f"[{snapshot.scanned_entries:,} scanned, {snapshot.found_blends:,} .blend] {current}",
            file=sys.stderr,
        )


def format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    if seconds < 10:
        return f"{seconds:.1f}s"
    return f"{secs}s"


def format_bytes(size: int | None) -> str:
    if size is None:
        return "0 B"
    size_f = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_f < 1024:
            return f"{size_f:.1f} {unit}"
        size_f /= 1024
    return f"{size_f:.1f} PB"
