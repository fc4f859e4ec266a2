"""Filtering of the flat file list."""

from collections.abc import Iterable
from dataclasses import dataclass

from blendscan.scanner.models import FileRecord


@dataclass(frozen=True)
class SearchResults:
    matches: tuple[FileRecord, ...]
    total: int

    @property
    def truncated(self) -> bool:
        return self.total > len(self.matches)


def search_files(files: Iterable[FileRecord], query: str, limit: int = 2000) -> SearchResults:
    """Case-insensitive substring match on file name or full path.

    An empty query matches everything. At most ``limit`` matches are kept;
    ``total`` counts all of them.
    """
    needle = query.strip().lower()
    matched = [
        record
        for record in files
        if not needle or needle in record.name.lower() or needle in record.path.lower()
    ]
    return SearchResults(matches=tuple(matched[:limit]), total=len(matched))
