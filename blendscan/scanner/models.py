"""Data models produced by a scan."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from blendscan.decoder.models import FormatInfo

DIR_NODE = "dir"
FILE_NODE = "file"


class ScanStatus(Enum):
    """Status of a scan job."""

    SCANNING = "scanning"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_finished(self) -> bool:
        return self is not ScanStatus.SCANNING


@dataclass(frozen=True)
class ParsedFilename:
    """Parsed components of a filename."""

    full: str
    base: str
    extension: str | None


@dataclass(frozen=True)
class FileRecord:
    """One matched file, with filesystem details and decoded metadata."""

    path: str
    name: str
    folder: str
    size: int
    created: str | None
    modified: str | None
    format_info: FormatInfo

    def meta_dict(self) -> dict[str, Any]:
        return {
            "size_bytes": self.size,
            "created": self.created,
            "modified": self.modified,
            "folder": self.folder,
            "format_info": self.format_info.to_dict(),
        }

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": self.path, **self.meta_dict()}


@dataclass(frozen=True)
class DirectoryNode:
    """A node of the result tree.

    Directory nodes carry ``children`` (sub-directories by name, then files
    in discovery order); file nodes carry ``record``.
    """

    type: str
    name: str
    path: str
    record: FileRecord | None = None
    children: tuple["DirectoryNode", ...] | None = None

    @classmethod
    def directory(cls, name: str, path: str, children: tuple["DirectoryNode", ...]) -> "DirectoryNode":
        return cls(type=DIR_NODE, name=name, path=path, children=children)

    @classmethod
    def file(cls, name: str, record: FileRecord) -> "DirectoryNode":
        return cls(type=FILE_NODE, name=name, path=record.path, record=record)

    @property
    def is_dir(self) -> bool:
        return self.type == DIR_NODE

    def iter_files(self) -> Iterator[FileRecord]:
        if self.record is not None:
            yield self.record
        for child in self.children or ():
            yield from child.iter_files()

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type, "name": self.name, "path": self.path}
        if self.record is not None:
            node["meta"] = self.record.meta_dict()
        if self.children is not None:
            node["children"] = [child.to_dict() for child in self.children]
        return node


@dataclass(frozen=True)
class ScanResult:
    tree: DirectoryNode
    files: tuple[FileRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tree": self.tree.to_dict(),
            "files": [record.to_dict() for record in self.files],
        }


@dataclass(frozen=True)
class ScanSnapshot:
    """Read-only copy of a scan job's progress, as returned by a poll."""

    job_id: int
    status: ScanStatus
    scanned_entries: int
    found_blends: int
    current_path: str | None
    error: str | None
    result: ScanResult | None
    elapsed_seconds: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": self.job_id,
            "status": self.status.value,
            "scanned_entries": self.scanned_entries,
            "found_blends": self.found_blends,
            "current_path": self.current_path,
            "error": self.error,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "result": self.result.to_dict() if self.result is not None else None,
        }
