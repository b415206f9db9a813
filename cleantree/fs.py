"""Filesystem access behind a small interface the walker can swap out.

Every accessor here resolves failures into ``None`` or an ``(value, error)``
pair instead of raising, so one unreadable path never aborts a traversal.
``MemoryFileSystem`` implements the same interface over an in-memory tree.
"""

from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import FileAccessError


@dataclass(frozen=True)
class EntryStat:
    """Subset of stat metadata collected per entry (not rendered)."""

    size: int
    mode: int
    mtime_ns: int


@dataclass(frozen=True)
class Classification:
    """Kind of one path; both flags are ``False`` when the path is inaccessible."""

    is_directory: bool
    is_file: bool
    stat: EntryStat | None = None


INACCESSIBLE = Classification(is_directory=False, is_file=False, stat=None)


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory."""

    name: str
    path: Path
    is_dir: bool
    is_last: bool = False
    stat: EntryStat | None = None


@dataclass(frozen=True)
class DirectoryListing:
    """Filtered children of one directory, or the error that prevented listing."""

    entries: tuple[Entry, ...] = ()
    error: FileAccessError | None = None

    @property
    def has_errors(self) -> bool:
        return self.error is not None


class FileSystem(Protocol):
    def classify(self, path: Path) -> Classification: ...

    def list_names(self, directory: Path) -> tuple[list[str], FileAccessError | None]: ...

    def read_text(self, path: Path) -> tuple[str | None, FileAccessError | None]: ...


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


class OsFileSystem:
    """``FileSystem`` backed by the real OS; symlinks are followed like ``stat``."""

    def classify(self, path: Path) -> Classification:
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            return INACCESSIBLE
        return Classification(
            is_directory=stat_module.S_ISDIR(st.st_mode),
            is_file=stat_module.S_ISREG(st.st_mode),
            stat=EntryStat(size=int(st.st_size), mode=int(st.st_mode), mtime_ns=int(st.st_mtime_ns)),
        )

    def list_names(self, directory: Path) -> tuple[list[str], FileAccessError | None]:
        try:
            return os.listdir(directory), None
        except OSError as exc:
            return [], FileAccessError(directory, _reason(exc))

    def read_text(self, path: Path) -> tuple[str | None, FileAccessError | None]:
        try:
            return path.read_text(encoding="utf-8"), None
        except (OSError, UnicodeDecodeError) as exc:
            reason = _reason(exc) if isinstance(exc, OSError) else str(exc)
            return None, FileAccessError(path, reason)


class MemoryFileSystem:
    """In-memory ``FileSystem`` keyed by absolute paths.

    Build it from a nested mapping: ``str`` values are file contents, ``dict``
    values are directories, and ``None`` marks an inaccessible entry (listed
    by its parent but failing to stat). Directories added to ``unreadable``
    classify normally but fail to list or read.
    """

    def __init__(self, root: Path, tree: dict[str, object], unreadable: set[Path] | None = None) -> None:
        self.root = Path(root)
        self.unreadable = {Path(path) for path in (unreadable or set())}
        self._nodes: dict[Path, object] = {self.root: tree}
        self._index(self.root, tree)

    def _index(self, directory: Path, tree: dict[str, object]) -> None:
        for name, node in tree.items():
            child = directory / name
            self._nodes[child] = node
            if isinstance(node, dict):
                self._index(child, node)

    def classify(self, path: Path) -> Classification:
        node = self._nodes.get(Path(path))
        if isinstance(node, dict):
            return Classification(
                is_directory=True,
                is_file=False,
                stat=EntryStat(size=0, mode=stat_module.S_IFDIR | 0o755, mtime_ns=0),
            )
        if isinstance(node, str):
            return Classification(
                is_directory=False,
                is_file=True,
                stat=EntryStat(size=len(node.encode("utf-8")), mode=stat_module.S_IFREG | 0o644, mtime_ns=0),
            )
        return INACCESSIBLE

    def list_names(self, directory: Path) -> tuple[list[str], FileAccessError | None]:
        directory = Path(directory)
        node = self._nodes.get(directory)
        if directory in self.unreadable:
            return [], FileAccessError(directory, "Permission denied")
        if not isinstance(node, dict):
            return [], FileAccessError(directory, "No such file or directory")
        return list(node), None

    def read_text(self, path: Path) -> tuple[str | None, FileAccessError | None]:
        path = Path(path)
        node = self._nodes.get(path)
        if path in self.unreadable:
            return None, FileAccessError(path, "Permission denied")
        if isinstance(node, dict):
            return None, FileAccessError(path, "Is a directory")
        if not isinstance(node, str):
            return None, FileAccessError(path, "No such file or directory")
        return node, None


def list_directory(fs: FileSystem, directory: Path) -> tuple[list[Entry], FileAccessError | None]:
    """Read and classify every child of ``directory`` in listing order.

    Returns ``(entries, error)``; ``error`` is set when the directory itself
    cannot be read, in which case ``entries`` is empty. ``is_last`` is left
    unset here because it only means something after filtering and sorting.
    """
    names, error = fs.list_names(directory)
    if error is not None:
        return [], error

    entries: list[Entry] = []
    for name in names:
        child_path = directory / name
        kind = fs.classify(child_path)
        entries.append(Entry(name=name, path=child_path, is_dir=kind.is_directory, stat=kind.stat))
    return entries, None


__all__ = [
    "Classification",
    "DirectoryListing",
    "Entry",
    "EntryStat",
    "FileSystem",
    "INACCESSIBLE",
    "MemoryFileSystem",
    "OsFileSystem",
    "list_directory",
]
