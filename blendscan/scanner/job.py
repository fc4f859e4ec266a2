"""Shared state of one scan job."""

import threading
import time
from pathlib import Path

from blendscan.scanner.models import ScanResult, ScanSnapshot, ScanStatus


class ScanJob:
    """Progress and result of a single scan.

    Written only by the job's own worker thread, read by any number of
    pollers. Every access goes through ``_lock``, which is never held while
    the worker performs I/O.
    """

    def __init__(self, job_id: int, root: Path) -> None:
        self.job_id = job_id
        self.root = root
        self.thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._cancel_requested = threading.Event()
        self._status = ScanStatus.SCANNING
        self._scanned_entries = 0
        self._found_blends = 0
        self._current_path: str | None = None
        self._error: str | None = None
        self._result: ScanResult | None = None
        self._started_at = time.monotonic()
        self._finished_at: float | None = None

    @property
    def status(self) -> ScanStatus:
        with self._lock:
            return self._status

    @property
    def finished_at(self) -> float | None:
        with self._lock:
            return self._finished_at

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested.is_set()

    def request_cancel(self) -> None:
        self._cancel_requested.set()

    def mark_scanning(self) -> None:
        with self._lock:
            self._status = ScanStatus.SCANNING

    def record_entry(self, current_path: str) -> None:
        with self._lock:
            self._scanned_entries += 1
            self._current_path = current_path

    def record_match(self) -> None:
        with self._lock:
            self._found_blends += 1

    def complete(self, result: ScanResult) -> None:
        # Result and status change together so pollers never see one without the other.
        with self._lock:
            self._result = result
            self._status = ScanStatus.DONE
            self._finished_at = time.monotonic()

    def fail(self, message: str) -> None:
        with self._lock:
            self._error = message
            self._status = ScanStatus.ERROR
            self._finished_at = time.monotonic()

    def mark_cancelled(self) -> None:
        with self._lock:
            self._status = ScanStatus.CANCELLED
            self._finished_at = time.monotonic()

    def snapshot(self) -> ScanSnapshot:
        with self._lock:
            end = self._finished_at if self._finished_at is not None else time.monotonic()
            return ScanSnapshot(
                job_id=self.job_id,
                status=self._status,
                scanned_entries=self._scanned_entries,
                found_blends=self._found_blends,
                current_path=self._current_path,
                error=self._error,
                result=self._result if self._status is ScanStatus.DONE else None,
                elapsed_seconds=end - self._started_at,
            )
