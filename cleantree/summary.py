"""Header and trailing count lines around the rendered tree."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .ui_theme import Styler


def root_label(start_path: Path) -> str:
    """Return the base name of ``start_path``, or the full path for filesystem roots."""
    return start_path.name or str(start_path)


def format_summary(dir_count: int, file_count: int) -> str:
    return f"{dir_count} directories, {file_count} files"


def write_header(out: TextIO, start_path: Path, styler: Styler) -> None:
    out.write(styler.header(root_label(start_path)) + "\n")


def write_summary(out: TextIO, dir_count: int, file_count: int, styler: Styler) -> None:
    """Write a blank separator line followed by the directory/file totals."""
    out.write("\n" + styler.summary(format_summary(dir_count, file_count)) + "\n")


__all__ = ["format_summary", "root_label", "write_header", "write_summary"]
