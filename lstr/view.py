"""The classic, non-interactive directory tree view."""

from __future__ import annotations

import contextlib
import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from lstr.git import FileStatus, GitRepoStatus, load_status
from lstr.icons import Color, get_icon_for_path
from lstr.options import ColorChoice, ViewArgs
from lstr.utils import format_size, mode_string
from lstr.walk import WalkEntry, walk

_BOLD = 1
_DIM = 2
_NO_PERMISSIONS = "----------"

_STATUS_COLORS = {
    FileStatus.NEW: Color.GREEN,
    FileStatus.RENAMED: Color.GREEN,
    FileStatus.MODIFIED: Color.YELLOW,
    FileStatus.TYPECHANGE: Color.YELLOW,
    FileStatus.DELETED: Color.RED,
    FileStatus.CONFLICTED: Color.BRIGHT_RED,
    FileStatus.UNTRACKED: Color.MAGENTA,
}


@dataclass(frozen=True)
class _Painter:
    enabled: bool

    def __call__(self, text: str, *codes: int) -> str:
        if not self.enabled or not text or not codes:
            return text
        return f"\x1b[{';'.join(map(str, codes))}m{text}\x1b[0m"


def _colour_enabled(choice: ColorChoice, out: TextIO) -> bool:
    if choice is ColorChoice.ALWAYS:
        return True
    if choice is ColorChoice.NEVER:
        return False
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("CLICOLOR") == "0":
        return False
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def _git_column(entry: WalkEntry, repo: GitRepoStatus, paint: _Painter) -> str:
    try:
        canonical = entry.path.resolve(strict=True)
    except (OSError, RuntimeError):
        return "  "
    status = repo.status_for(canonical)
    if status is None:
        return "  "
    return paint(f"{status.symbol()} ", _STATUS_COLORS[status].value)


def _permissions(metadata: os.stat_result | None) -> str:
    if metadata is None or os.name != "posix":
        return _NO_PERMISSIONS
    return mode_string(metadata.st_mode, stat.S_ISDIR(metadata.st_mode))


def _format_line(
    entry: WalkEntry, args: ViewArgs, repo: GitRepoStatus | None, paint: _Painter
) -> str:
    git_str = _git_column(entry, repo, paint) if repo is not None else ""

    metadata = None
    if args.size or args.permissions:
        with contextlib.suppress(OSError):
            metadata = os.lstat(entry.path)

    permissions = f"{_permissions(metadata)} " if args.permissions else ""
    indent = "    " * max(entry.depth - 1, 0)

    icon = ""
    if args.icons:
        glyph, colour = get_icon_for_path(entry.path, entry.is_dir)
        icon = paint(glyph, colour.value) + " "

    prefix = f"{git_str}{paint(permissions, _DIM)}{indent}└── {icon}"
    if entry.is_dir:
        return prefix + paint(entry.name, _BOLD, Color.BLUE.value)

    size = ""
    if args.size and metadata is not None:
        size = f" ({format_size(metadata.st_size)})"
    return prefix + entry.name + paint(size, _DIM)


def run(args: ViewArgs, out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Print the tree under ``args.path`` followed by a count of its entries.

    Raises NotADirectoryError when the path is not a directory.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    path = Path(args.path)
    if not path.is_dir():
        raise NotADirectoryError(f"'{path}' is not a directory.")
    canonical_root = path.resolve(strict=True)
    paint = _Painter(_colour_enabled(args.color, out))

    try:
        out.write(paint(str(path), _BOLD, Color.BLUE.value) + "\n")
    except BrokenPipeError:
        return

    repo = load_status(canonical_root) if args.git_status else None

    dirs = files = 0
    try:
        for item in walk(
            path, hidden=not args.all, gitignore=args.gitignore, max_depth=args.level
        ):
            if isinstance(item, OSError):
                err.write(f"lstr: ERROR: {item}\n")
                continue
            if item.depth == 0:
                continue
            if args.dirs_only and not item.is_dir:
                continue
            if item.is_dir:
                dirs += 1
            else:
                files += 1
            out.write(_format_line(item, args, repo, paint) + "\n")
    except BrokenPipeError:
        pass

    with contextlib.suppress(OSError):
        out.write(f"\n{dirs} directories, {files} files\n")