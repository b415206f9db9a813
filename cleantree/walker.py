"""Depth-first tree rendering.

``TreeWalker`` lists one directory at a time, writes each visible child with
its connector, and recurses into subdirectories until the depth limit. Nothing
but the running counters outlives a directory visit; output is written as the
walk proceeds.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .config import ResolvedConfig
from .errors import InvalidPathError
from .filtering import process_entries
from .fs import DirectoryListing, Entry, FileSystem, OsFileSystem, list_directory
from .summary import write_header, write_summary
from .ui_theme import TREE_SYMBOLS, Styler


@dataclass
class RunningStats:
    """Counts of rendered directory and file lines."""

    dir_count: int = 0
    file_count: int = 0

    def record(self, entry: Entry) -> None:
        if entry.is_dir:
            self.dir_count += 1
        else:
            self.file_count += 1


def next_prefix(prefix: str, is_last: bool) -> str:
    """Extend ``prefix`` for the children of an entry."""
    return prefix + (TREE_SYMBOLS.space if is_last else TREE_SYMBOLS.vertical)


class TreeWalker:
    """Render one tree; create a fresh walker per run."""

    def __init__(
        self,
        config: ResolvedConfig,
        fs: FileSystem | None = None,
        out: TextIO | None = None,
        styler: Styler | None = None,
    ) -> None:
        self.config = config
        self.fs = fs or OsFileSystem()
        self.out = out if out is not None else sys.stdout
        self.styler = styler or Styler.for_stream(self.out, config.display.color_output)

    def read_directory(self, directory: Path) -> DirectoryListing:
        """List, filter, and sort ``directory``'s children."""
        entries, error = list_directory(self.fs, directory)
        if error is not None:
            return DirectoryListing(error=error)
        visible = process_entries(entries, self.config.ignore_rules, self.config.start_path)
        return DirectoryListing(entries=tuple(visible))

    def format_entry(self, entry: Entry, prefix: str) -> str:
        connector = TREE_SYMBOLS.last if entry.is_last else TREE_SYMBOLS.branch
        name = self.styler.directory(entry.name) if entry.is_dir else self.styler.file(entry.name)
        return f"{prefix}{connector}{name}"

    def walk(self, directory: Path, prefix: str, depth: int, stats: RunningStats) -> RunningStats:
        """Render the children of ``directory`` at ``depth`` (root children are depth 1)."""
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            return stats

        listing = self.read_directory(directory)
        if listing.has_errors:
            message = self.styler.error(f"[Error: {listing.error.reason}]")
            self.out.write(f"{prefix}{TREE_SYMBOLS.last}{message}\n")
            return stats

        for entry in listing.entries:
            self.out.write(self.format_entry(entry, prefix) + "\n")
            stats.record(entry)
            if entry.is_dir:
                self.walk(entry.path, next_prefix(prefix, entry.is_last), depth + 1, stats)
        return stats

    def validate_start_path(self) -> None:
        if not self.fs.classify(self.config.start_path).is_directory:
            raise InvalidPathError(self.config.start_path)

    def generate(self) -> RunningStats:
        """Write header, tree, and summary; return the final counts.

        Raises ``InvalidPathError`` before writing anything when the start
        path is not a directory.
        """
        self.validate_start_path()
        start_path = self.config.start_path
        write_header(self.out, start_path, self.styler)
        stats = self.walk(start_path, "", 1, RunningStats())
        write_summary(self.out, stats.dir_count, stats.file_count, self.styler)
        return stats


__all__ = ["RunningStats", "TreeWalker", "next_prefix"]
