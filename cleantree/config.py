"""Run options, display options, and the persisted JSON user config.

``TreeOptions`` is what the CLI parsed; ``ResolvedConfig`` is what the walker
runs with. The user config file only ever overrides display defaults and is
read defensively: anything malformed falls back to the built-in values.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_config_dir

from .fs import FileSystem, OsFileSystem
from .ignore_rules import IgnoreRules, build_ignore_rules

APP_NAME = "cleantree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class TreeOptions:
    """Parsed command-line options for one run."""

    path: str = "."
    depth: int | None = None
    exclude: str | None = None
    gitignore: bool = False
    allignore: bool = False


@dataclass(frozen=True)
class DisplayOptions:
    """Display switches; only ``color_output`` currently affects rendering."""

    show_hidden: bool = False
    color_output: bool = True
    show_size: bool = False
    show_permissions: bool = False


@dataclass(frozen=True)
class ResolvedConfig:
    """Everything a traversal needs, derived once from ``TreeOptions``.

    ``max_depth`` is ``None`` when depth is unbounded.
    """

    start_path: Path
    max_depth: int | None = None
    ignore_rules: IgnoreRules = field(default_factory=IgnoreRules)
    display: DisplayOptions = field(default_factory=DisplayOptions)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_display_options() -> DisplayOptions:
    """Return display defaults with the persisted ``color`` preference applied.

    Only an explicit boolean is honored; any other value keeps the default.
    """
    display = DisplayOptions()
    value = load_config().get("color")
    if isinstance(value, bool):
        display = replace(display, color_output=value)
    return display


def resolve_config(
    options: TreeOptions,
    fs: FileSystem | None = None,
    display: DisplayOptions | None = None,
    warn: Callable[[str], None] | None = None,
) -> ResolvedConfig:
    """Resolve the start path and compose ignore rules for one run.

    Raises ``IgnoreRulesError`` when the ignore patterns cannot be compiled.
    Start-path validation is left to the walker.
    """
    filesystem = fs or OsFileSystem()
    start_path = Path(options.path).resolve()
    rules = build_ignore_rules(
        start_path,
        filesystem,
        exclude=options.exclude,
        use_gitignore=options.gitignore,
        use_all_ignore=options.allignore,
        warn=warn,
    )
    return ResolvedConfig(
        start_path=start_path,
        max_depth=options.depth,
        ignore_rules=rules,
        display=display or DisplayOptions(),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DisplayOptions",
    "ResolvedConfig",
    "TreeOptions",
    "load_config",
    "load_display_options",
    "resolve_config",
]
