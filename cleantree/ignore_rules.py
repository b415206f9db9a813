"""Compose ignore patterns from CLI options and ``.*ignore`` files.

All sources are unioned into one ``pathspec.GitIgnoreSpec`` that is built once
per run and matched against paths relative to the start directory. The
OS-junk blocklist is not compiled into the pattern set; it is applied as its
own filter stage.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from .errors import IgnoreRulesError
from .fs import FileSystem

GITIGNORE_FILENAME = ".gitignore"
SYSTEM_FILES = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})

_BRACE_RE = re.compile(r"(?<!\\)\{([^{}]*,[^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations into one pattern per alternative.

    Nested groups expand innermost first. Escaped braces and
    groups without a comma are left untouched.
    """
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head = pattern[: match.start()]
    tail = pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def is_ignore_file_name(name: str) -> bool:
    """Return whether ``name`` looks like ``.gitignore``, ``.npmignore``, and so on."""
    return name.startswith(".") and name.endswith("ignore")


@dataclass(frozen=True)
class IgnoreRules:
    """Immutable ignore predicate over start-relative, forward-slash paths."""

    patterns: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    spec: pathspec.PathSpec | None = field(default=None, compare=False, repr=False)

    def ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        if self.spec is None or not relative_path:
            return False
        candidate = relative_path.replace("\\", "/")
        if is_dir and not candidate.endswith("/"):
            candidate += "/"
        return self.spec.match_file(candidate)


def _pattern_lines(content: str) -> list[str]:
    lines: list[str] = []
    for raw in content.splitlines():
        lines.extend(expand_braces(raw))
    return lines


def _compile(start_path: Path, patterns: Iterable[str]) -> pathspec.PathSpec:
    try:
        return pathspec.GitIgnoreSpec.from_lines(list(patterns))
    except (ValueError, TypeError) as exc:
        raise IgnoreRulesError(start_path) from exc


def _read_ignore_file(
    fs: FileSystem,
    path: Path,
    warn: Callable[[str], None],
) -> list[str] | None:
    content, error = fs.read_text(path)
    if error is not None:
        warn(f"Error reading {path.name} file: {error.reason}")
        return None
    return _pattern_lines(content or "")


def _exists(fs: FileSystem, path: Path) -> bool:
    kind = fs.classify(path)
    return kind.is_file or kind.is_directory


def _all_ignore_file_names(fs: FileSystem, start_path: Path) -> list[str]:
    names, error = fs.list_names(start_path)
    if error is not None:
        return []
    candidates: list[str] = []
    for name in sorted(names):
        if not is_ignore_file_name(name):
            continue
        if fs.classify(start_path / name).is_file:
            candidates.append(name)
    return candidates


def build_ignore_rules(
    start_path: Path,
    fs: FileSystem,
    *,
    exclude: str | None = None,
    use_gitignore: bool = False,
    use_all_ignore: bool = False,
    warn: Callable[[str], None] | None = None,
) -> IgnoreRules:
    """Build the run's ignore predicate.

    ``use_all_ignore`` reads every top-level ``.*ignore`` file and supersedes
    ``use_gitignore``, which reads only ``.gitignore``. ``exclude`` is always
    added as one more rule. Unreadable ignore files are reported through
    ``warn`` and skipped; a missing or empty file contributes nothing.

    Raises ``IgnoreRulesError`` when the combined patterns cannot be compiled.
    """
    emit = warn or (lambda _message: None)
    patterns: list[str] = []
    sources: list[str] = []

    if use_all_ignore:
        file_names = _all_ignore_file_names(fs, start_path)
    elif use_gitignore and _exists(fs, start_path / GITIGNORE_FILENAME):
        file_names = [GITIGNORE_FILENAME]
    else:
        file_names = []

    for name in file_names:
        lines = _read_ignore_file(fs, start_path / name, emit)
        if lines is None:
            continue
        patterns.extend(lines)
        sources.append(name)

    if exclude:
        patterns.extend(expand_braces(exclude))

    if not patterns:
        return IgnoreRules(sources=tuple(sources))
    return IgnoreRules(
        patterns=tuple(patterns),
        sources=tuple(sources),
        spec=_compile(start_path, patterns),
    )


__all__ = [
    "GITIGNORE_FILENAME",
    "IgnoreRules",
    "SYSTEM_FILES",
    "build_ignore_rules",
    "expand_braces",
    "is_ignore_file_name",
]
