"""Command-line entry point: parse arguments and start the chosen view."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from lstr import tui, view
from lstr.options import ColorChoice, InteractiveArgs, ViewArgs

_PROG = "lstr"
_VERSION = "0.2.0"
_DESCRIPTION = "A fast, minimalist directory tree viewer."
_USAGE = f"{_PROG} [OPTIONS] [PATH]\n       {_PROG} interactive [OPTIONS] [PATH]"
_INTERACTIVE_NAMES = frozenset({"interactive", "i"})
_COMMANDS_EPILOG = (
    "commands:\n"
    "  interactive, i  Start the interactive TUI explorer."
)


def _color_choice(value: str) -> ColorChoice:
    try:
        return ColorChoice.parse(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from None


def _depth(value: str) -> int:
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid digit found in '{value}'") from None
    if depth < 0:
        raise argparse.ArgumentTypeError(f"invalid value '{value}': must not be negative")
    return depth


def _add_version(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-V", "--version", action="version", version=f"{_PROG} {_VERSION}"
    )


def _add_common_options(parser: argparse.ArgumentParser, what: str) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help=f"The path to the directory to {what}. Defaults to the current directory.",
    )
    parser.add_argument(
        "-a", "--all", action="store_true", help="Show all files, including hidden ones"
    )
    parser.add_argument(
        "-g",
        "--gitignore",
        action="store_true",
        help="Respect .gitignore and other standard ignore files.",
    )
    parser.add_argument(
        "-G",
        "--git-status",
        action="store_true",
        help="Show git status for files and directories.",
    )
    parser.add_argument(
        "--icons",
        action="store_true",
        help="Display file-specific icons (requires a Nerd Font)",
    )
    parser.add_argument(
        "-s", "--size", action="store_true", help="Display the size of files."
    )
    parser.add_argument(
        "-p", "--permissions", action="store_true", help="Display file permissions."
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the classic tree view, the default command."""
    parser = argparse.ArgumentParser(
        prog=_PROG,
        usage=_USAGE,
        description=_DESCRIPTION,
        epilog=_COMMANDS_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_version(parser)
    _add_common_options(parser, "display")
    parser.add_argument(
        "--color",
        metavar="WHEN",
        type=_color_choice,
        default=ColorChoice.AUTO,
        help="Specify when to use colorized output (always, auto, never). Default: auto.",
    )
    parser.add_argument(
        "-L",
        "--level",
        type=_depth,
        default=None,
        help="Maximum depth to descend in the directory tree.",
    )
    parser.add_argument(
        "-d", "--dirs-only", action="store_true", help="Display directories only."
    )
    return parser


def _build_interactive_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{_PROG} interactive",
        description="Start the interactive TUI explorer.",
    )
    _add_version(parser)
    _add_common_options(parser, "explore")
    parser.add_argument(
        "--expand-level",
        metavar="LEVEL",
        type=_depth,
        default=None,
        help="Initial depth to expand the directory tree.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> ViewArgs | InteractiveArgs:
    """Parse ``argv`` into the settings of the tree view or of the explorer.

    Invalid arguments make argparse print a message and raise SystemExit.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    if tokens and tokens[0] in _INTERACTIVE_NAMES:
        namespace = _build_interactive_parser().parse_args(tokens[1:])
        return InteractiveArgs(**vars(namespace))
    namespace = build_parser().parse_args(tokens)
    return ViewArgs(**vars(namespace))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = parse_args(argv)
    try:
        if isinstance(args, InteractiveArgs):
            tui.run(args)
        else:
            view.run(args)
    except (OSError, RuntimeError) as error:
        sys.stderr.write(f"Error: {error}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())