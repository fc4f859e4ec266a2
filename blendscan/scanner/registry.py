"""Registry that issues scan ids and answers polls."""

import itertools
import logging
import threading
import time
from pathlib import Path

from blendscan.config import Config
from blendscan.exceptions import JobNotFoundError, JobStillRunningError, PathNotFoundError
from blendscan.scanner.job import ScanJob
from blendscan.scanner.models import ScanSnapshot
from blendscan.scanner.worker import ScanWorker

logger = logging.getLogger(__name__)


class ScanRegistry:
    """Owns every scan job started through it.

    Each ``start_scan`` runs on its own daemon thread; ``poll_scan`` only
    copies state and never waits for a worker. Ids start at 1 and are never
    reused, even after a job is disposed.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self._jobs: dict[int, ScanJob] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def start_scan(self, root_path: str | Path) -> int:
        root = Path(root_path)
        if not root.exists():
            raise PathNotFoundError(f"Folder does not exist: {root}")
        root = root.resolve()

        with self._lock:
            job_id = next(self._ids)

        job = ScanJob(job_id, root)
        worker = ScanWorker(root, job, self.config)
        job.thread = threading.Thread(target=worker.run, name=f"scan-{job_id}", daemon=True)
        try:
            job.thread.start()
        except RuntimeError:
            logger.error("Could not start a thread for scan %d of %s", job_id, root)
            raise

        # Only jobs whose worker is running become visible to pollers.
        with self._lock:
            self._jobs[job_id] = job
        logger.debug("Spawned scan %d for %s", job_id, root)
        return job_id

    def poll_scan(self, job_id: int) -> ScanSnapshot:
        return self._get_job(job_id).snapshot()

    def wait(self, job_id: int, timeout: float | None = None) -> ScanSnapshot:
        """Block until the job finishes (or ``timeout`` expires) and poll it."""
        job = self._get_job(job_id)
        if job.thread is not None:
            job.thread.join(timeout)
        return job.snapshot()

    def cancel(self, job_id: int) -> None:
        self._get_job(job_id).request_cancel()

    def dispose(self, job_id: int) -> None:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(f"Scan id not found: {job_id}")
            if not job.status.is_finished:
                raise JobStillRunningError(f"Scan {job_id} is still running")
            del self._jobs[job_id]

    def evict_finished(self, max_age_seconds: float) -> list[int]:
        """Dispose of finished jobs that ended more than ``max_age_seconds`` ago."""
        cutoff = time.monotonic() - max_age_seconds
        with self._lock:
            expired = [
                job_id
                for job_id, job in self._jobs.items()
                if job.finished_at is not None and job.finished_at <= cutoff
            ]
            for job_id in expired:
                del self._jobs[job_id]

        if expired:
            logger.debug("Evicted scans: %s", expired)
        return expired

    def job_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._jobs)

    def _get_job(self, job_id: int) -> ScanJob:
        with self._lock:
            job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(f"Scan id not found: {job_id}")
        return job
