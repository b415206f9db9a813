"""Filter and order one directory's entries for rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from functools import lru_cache
from pathlib import Path

import pyuca

from .fs import Entry
from .ignore_rules import SYSTEM_FILES, IgnoreRules


def relative_path(entry: Entry, start_path: Path) -> str:
    """Return ``entry``'s start-relative path with forward slashes."""
    try:
        return entry.path.relative_to(start_path).as_posix()
    except ValueError:
        return entry.name


@lru_cache(maxsize=1)
def _collator() -> pyuca.Collator:
    return pyuca.Collator()


def entry_sort_key(entry: Entry) -> tuple[bool, tuple[int, ...], str]:
    """Directories first, then Unicode collation order, then the raw name.

    Collation puts lowercase before uppercase, accented letters beside their
    base letter, and punctuation and symbols before letters.
    """
    return (not entry.is_dir, _collator().sort_key(entry.name), entry.name)


def mark_last(entries: Iterable[Entry]) -> list[Entry]:
    """Return a copy where only the final entry carries ``is_last``."""
    ordered = list(entries)
    last_index = len(ordered) - 1
    return [replace(entry, is_last=index == last_index) for index, entry in enumerate(ordered)]


def process_entries(entries: Iterable[Entry], rules: IgnoreRules, start_path: Path) -> list[Entry]:
    """Drop blocklisted and ignored entries, sort, then recompute ``is_last``.

    Ignore matching always uses paths relative to ``start_path``, never to the
    directory being listed, so anchored patterns keep their meaning at depth.
    """
    visible = [entry for entry in entries if entry.name not in SYSTEM_FILES]
    visible = [entry for entry in visible if not rules.ignored(relative_path(entry, start_path), entry.is_dir)]
    visible.sort(key=entry_sort_key)
    return mark_last(visible)


__all__ = ["entry_sort_key", "mark_last", "process_entries", "relative_path"]
