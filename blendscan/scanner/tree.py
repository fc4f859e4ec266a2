"""Accumulation of matched files into a directory tree."""

from collections.abc import Sequence
from pathlib import Path

from blendscan.scanner.models import DirectoryNode, FileRecord


class _DirectoryBuilder:
    def __init__(self) -> None:
        self.dirs: dict[str, _DirectoryBuilder] = {}
        self.files: list[tuple[str, FileRecord]] = []


class TreeBuilder:
    """Collects files by directory segments and renders them once.

    Sub-directories are sorted by name when rendered; files keep the order
    in which they were inserted.
    """

    def __init__(self) -> None:
        self._root = _DirectoryBuilder()
        self._finalized = False

    def insert(self, segments: Sequence[str], name: str, record: FileRecord) -> None:
        if self._finalized:
            raise RuntimeError("Cannot insert into a finalized tree")

        current = self._root
        for segment in segments:
            current = current.dirs.setdefault(segment, _DirectoryBuilder())
        current.files.append((name, record))

    def finalize(self, root_name: str, root_path: str) -> DirectoryNode:
        if self._finalized:
            raise RuntimeError("Tree has already been finalized")
        self._finalized = True
        return _render(self._root, root_name, Path(root_path))


def _render(directory: _DirectoryBuilder, name: str, path: Path) -> DirectoryNode:
    children: list[DirectoryNode] = []

    for dir_name in sorted(directory.dirs):
        children.append(_render(directory.dirs[dir_name], dir_name, path / dir_name))

    for file_name, record in directory.files:
        children.append(DirectoryNode.file(file_name, record))

    return DirectoryNode.directory(name, str(path), tuple(children))
