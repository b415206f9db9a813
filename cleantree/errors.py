"""Error taxonomy for tree generation.

Fatal configuration problems raise ``TreeError`` subclasses; the CLI turns
them into a coded message and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class TreeError(Exception):
    """Base error carrying a short code label and the offending path."""

    code = "TREE_ERROR"

    def __init__(self, message: str, code: str | None = None, path: Path | str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.path = path


class InvalidPathError(TreeError):
    """Start path is missing or is not a directory."""

    code = "INVALID_PATH_ERROR"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Invalid path: {path}", path=path)


class IgnoreRulesError(TreeError):
    """Ignore patterns could not be compiled."""

    code = "GITIGNORE_PARSE_ERROR"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Failed to parse ignore rules: {path}", path=path)


class FileAccessError(TreeError):
    """A file or directory could not be read."""

    code = "FILE_ACCESS_ERROR"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Cannot access file or directory: {path} ({reason})", path=path)
        self.reason = reason
