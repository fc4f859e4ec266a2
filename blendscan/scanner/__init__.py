"""Scanner module for filesystem traversal and scan jobs."""

from .filesystem import parse_filename, walk_entries
from .models import DirectoryNode, FileRecord, ScanResult, ScanSnapshot, ScanStatus
from .progress import ProgressReporter
from .registry import ScanRegistry
from .search import SearchResults, search_files
from .tree import TreeBuilder
from .worker import ScanWorker

__all__ = [
    "DirectoryNode",
    "FileRecord",
    "ProgressReporter",
    "ScanRegistry",
    "ScanResult",
    "ScanSnapshot",
    "ScanStatus",
    "ScanWorker",
    "SearchResults",
    "TreeBuilder",
    "parse_filename",
    "search_files",
    "walk_entries",
]
