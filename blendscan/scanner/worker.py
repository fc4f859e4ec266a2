"""Background traversal that feeds a scan job."""

import logging
from pathlib import Path

from blendscan.config import Config
from blendscan.decoder import decode_file
from blendscan.scanner.filesystem import (
    describe_walk_error,
    format_timestamp,
    get_birthtime,
    parse_filename,
    relative_segments,
    walk_entries,
)
from blendscan.scanner.job import ScanJob
from blendscan.scanner.models import FileRecord, ScanResult
from blendscan.scanner.tree import TreeBuilder

logger = logging.getLogger(__name__)


class ScanWorker:
    """Walks one root directory and publishes progress into a ScanJob."""

    def __init__(self, root: Path, job: ScanJob, config: Config | None = None):
        self.root = root
        self.job = job
        self.config = config or Config()
        self.extension = self.config.scanner.extension.lower().lstrip(".")

    def run(self) -> None:
        self.job.mark_scanning()
        logger.info("Starting scan %d of %s", self.job.job_id, self.root)

        try:
            result = self._scan()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception("Scan %d of %s failed", self.job.job_id, self.root)
            self.job.fail(f"Scan failed: {e}")
            return

        if result is None:
            logger.info("Scan %d of %s cancelled", self.job.job_id, self.root)
            self.job.mark_cancelled()
            return

        self.job.complete(result)
        logger.info(
            "Scan %d complete: %d .blend files in %s",
            self.job.job_id,
            len(result.files),
            self.root,
        )

    def _scan(self) -> ScanResult | None:
        files: list[FileRecord] = []
        builder = TreeBuilder()

        for entry in walk_entries(self.root):
            if self.job.cancel_requested:
                return None

            if entry.error is not None:
                self.job.record_entry(describe_walk_error(entry.error))
                continue

            self.job.record_entry(str(entry.path))

            if not entry.is_file:
                continue
            if parse_filename(entry.path.name).extension != self.extension:
                continue

            self.job.record_match()
            record = self._build_record(entry.path)
            if record is None:
                continue

            files.append(record)
            builder.insert(relative_segments(entry.path, self.root), record.name, record)

        tree = builder.finalize(self.root.name or str(self.root), str(self.root))
        return ScanResult(tree=tree, files=tuple(files))

    def _build_record(self, path: Path) -> FileRecord | None:
        try:
            stat_result = path.stat()
        except FileNotFoundError:
            logger.warning("File disappeared during scan: %s", path)
            return None
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            return None

        return FileRecord(
            path=str(path),
            name=path.name,
            folder=str(path.parent),
            size=stat_result.st_size,
            created=format_timestamp(get_birthtime(stat_result)),
            modified=format_timestamp(stat_result.st_mtime),
            format_info=decode_file(path, self.config.decoder),
        )
