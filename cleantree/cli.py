"""Command-line front door for clean-tree.

Parses CLI options, resolves the run configuration, and renders the tree.
Fatal configuration errors exit non-zero with a coded message on stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from .config import DisplayOptions, TreeOptions, load_display_options, resolve_config
from .errors import TreeError
from .fs import FileSystem, OsFileSystem
from .ui_theme import Styler
from .walker import RunningStats, TreeWalker


def _non_negative_int(value: str) -> int:
    """argparse type for depth values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clean-tree",
        usage="%(prog)s [path] [options]",
        description="List directory contents in a connected tree format.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Path to the directory to display. Defaults to current directory.")
    parser.add_argument("-d", "--depth", type=_non_negative_int, default=None, help="Maximum depth to display directories.")
    parser.add_argument("-e", "--exclude", default=None, help="Pattern to exclude files or directories (glob format).")
    parser.add_argument("-g", "--gitignore", action="store_true", help="Ignore entries matched by the .gitignore file.")
    parser.add_argument(
        "-a",
        "--allignore",
        action="store_true",
        help="Ignore entries matched by any .*ignore file (e.g. .gitignore, .npmignore, .dockerignore).",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> TreeOptions:
    args = build_parser().parse_args(argv)
    return TreeOptions(
        path=args.path,
        depth=args.depth,
        exclude=args.exclude,
        gitignore=args.gitignore,
        allignore=args.allignore,
    )


def render_tree(
    options: TreeOptions,
    fs: FileSystem | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    display: DisplayOptions | None = None,
) -> RunningStats:
    """Resolve ``options`` and render one tree to ``out``.

    Ignore-file warnings go to ``err``. Raises ``TreeError`` for fatal
    configuration problems before any tree output is written.
    """
    filesystem = fs or OsFileSystem()
    out_stream = out if out is not None else sys.stdout
    err_stream = err if err is not None else sys.stderr
    display_options = display or DisplayOptions()
    err_styler = Styler.for_stream(err_stream, display_options.color_output)

    def warn(message: str) -> None:
        err_stream.write(err_styler.error(f"Warning: {message}") + "\n")

    config = resolve_config(options, fs=filesystem, display=display_options, warn=warn)
    walker = TreeWalker(config, fs=filesystem, out=out_stream)
    return walker.generate()


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and print the tree for the requested path."""
    options = parse_options(argv)
    try:
        render_tree(options, display=load_display_options())
    except TreeError as exc:
        raise SystemExit(f"Error [{exc.code}]: {exc}") from exc


if __name__ == "__main__":
    main()
