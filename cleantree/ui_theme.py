"""ANSI palette, tree glyphs, and the styling passthrough used by renderers.

Styling is a wrapper around plain text: with color disabled every method
returns its input unchanged, so plain output is byte-identical to the
styled output with escapes removed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class TreeSymbols:
    """Connector glyphs; each is four columns wide."""

    branch: str = "├── "
    last: str = "└── "
    vertical: str = "│   "
    space: str = "    "


TREE_SYMBOLS = TreeSymbols()


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    tree_dir: str
    error: str
    summary: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;34m",
    tree_dir="\033[1;34m",
    error="\033[31m",
    summary="\033[32m",
)


def stream_supports_color(stream: TextIO | None) -> bool:
    """Return whether ``stream`` is an interactive terminal and ``NO_COLOR`` is unset."""
    if stream is None or os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if callable(isatty) else False
    except (OSError, ValueError):
        return False


class Styler:
    """Wrap text in theme colors, or pass it through untouched."""

    def __init__(self, enabled: bool, theme: UITheme | None = None) -> None:
        self.enabled = enabled
        self.theme = theme or DEFAULT_THEME

    @classmethod
    def for_stream(cls, stream: TextIO | None, color_output: bool = True) -> Styler:
        return cls(enabled=color_output and stream_supports_color(stream))

    def _wrap(self, color: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"{color}{text}{self.theme.reset}"

    def header(self, text: str) -> str:
        return self._wrap(self.theme.header, text)

    def directory(self, text: str) -> str:
        return self._wrap(self.theme.tree_dir, text)

    def file(self, text: str) -> str:
        return text

    def error(self, text: str) -> str:
        return self._wrap(self.theme.error, text)

    def summary(self, text: str) -> str:
        return self._wrap(self.theme.summary, text)


PLAIN = Styler(enabled=False)
