"""The interactive terminal explorer."""

from __future__ import annotations

import contextlib
import os
import stat
import subprocess
import sys
import unicodedata
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import NamedTuple

from lstr.git import FileStatus, GitRepoStatus, load_status
from lstr.icons import Color, get_icon_for_path
from lstr.options import InteractiveArgs
from lstr.utils import format_size, mode_string
from lstr.walk import WalkEntry, walk

try:
    import curses
except ImportError:  # pragma: no cover - platforms without curses
    curses = None  # type: ignore[assignment]

_NO_PERMISSIONS = "----------"
_HIGHLIGHT_SYMBOL = "> "
_CTRL_S = 19
_ESCAPE = 27

_STATUS_COLORS = {
    FileStatus.NEW: Color.GREEN,
    FileStatus.RENAMED: Color.GREEN,
    FileStatus.MODIFIED: Color.YELLOW,
    FileStatus.TYPECHANGE: Color.YELLOW,
    FileStatus.DELETED: Color.RED,
    FileStatus.CONFLICTED: Color.BRIGHT_RED,
    FileStatus.UNTRACKED: Color.MAGENTA,
}

# Icon colours as the explorer shows them: "bright black" becomes light gray
# and plain white becomes bright white.
_ICON_COLOR_MAP = {
    Color.BRIGHT_BLACK: Color.WHITE,
    Color.WHITE: Color.BRIGHT_WHITE,
}

_DARK_GRAY = Color.BRIGHT_BLACK


class PostExitAction(Enum):
    """What to do once the explorer has closed."""

    NONE = auto()
    OPEN_FILE = auto()
    PRINT_PATH = auto()


@dataclass
class FileEntry:
    """One file or directory known to the explorer."""

    path: Path
    depth: int
    is_dir: bool
    is_expanded: bool = False
    size: int | None = None
    permissions: str | None = None
    git_status: FileStatus | None = None


class _Span(NamedTuple):
    text: str
    color: Color | None = None
    bold: bool = False


class AppState:
    """The full entry list, the part of it currently shown, and the selection."""

    def __init__(self, master_entries: Iterable[FileEntry]) -> None:
        self.master_entries: list[FileEntry] = list(master_entries)
        self.visible_entries: list[FileEntry] = []
        self.selected: int | None = None
        self.offset = 0
        self.regenerate_visible_entries()
        if self.visible_entries:
            self.selected = 0

    def regenerate_visible_entries(self) -> None:
        """Recompute which entries are shown: those whose ancestors are all expanded."""
        expanded_parents: list[bool] = []
        visible: list[FileEntry] = []
        for entry in self.master_entries:
            del expanded_parents[max(entry.depth - 1, 0):]
            if all(expanded_parents):
                visible.append(entry)
            if entry.is_dir:
                expanded_parents.append(entry.is_expanded)
        self.visible_entries = visible

    def next(self) -> None:
        """Move the selection down, wrapping to the top."""
        if not self.visible_entries:
            return
        if self.selected is None or self.selected >= len(self.visible_entries) - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        """Move the selection up, wrapping to the bottom."""
        if not self.visible_entries:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = len(self.visible_entries) - 1
        else:
            self.selected -= 1

    def selected_entry(self) -> FileEntry | None:
        """Return the selected entry, or None if nothing is selected."""
        if self.selected is None or not 0 <= self.selected < len(self.visible_entries):
            return None
        return self.visible_entries[self.selected]

    def toggle_selected_directory(self) -> None:
        """Expand or collapse the selected directory, keeping it selected."""
        current = self.selected_entry()
        if current is None:
            return
        index = self.selected
        target = next((e for e in self.master_entries if e.path == current.path), None)
        if target is not None and target.is_dir:
            target.is_expanded = not target.is_expanded
        self.regenerate_visible_entries()
        position = next(
            (i for i, e in enumerate(self.visible_entries) if e.path == current.path),
            None,
        )
        if position is None:
            position = min(index, len(self.visible_entries) - 1)
            if position < 0:
                position = None
        self.selected = position

    def _scroll_into_view(self, height: int) -> None:
        if self.selected is None or height <= 0:
            return
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + height:
            self.offset = self.selected - height + 1


def _entry_metadata(item: WalkEntry, args: InteractiveArgs) -> os.stat_result | None:
    if not (args.size or args.permissions):
        return None
    try:
        return os.lstat(item.path)
    except OSError:
        return None


def scan_directory(
    path: str | os.PathLike[str],
    repo_status: GitRepoStatus | None,
    args: InteractiveArgs,
) -> list[FileEntry]:
    """Collect every entry below ``path`` in walk order, excluding ``path`` itself."""
    entries: list[FileEntry] = []
    for item in walk(path, hidden=not args.all, gitignore=args.gitignore):
        if isinstance(item, OSError) or item.depth == 0:
            continue
        metadata = _entry_metadata(item, args)
        size = None
        if args.size and not item.is_dir and metadata is not None:
            size = metadata.st_size
        permissions = None
        if args.permissions and metadata is not None:
            if os.name == "posix":
                permissions = mode_string(
                    metadata.st_mode, stat.S_ISDIR(metadata.st_mode)
                )
            else:
                permissions = _NO_PERMISSIONS
        git_status = repo_status.status_for(item.path) if repo_status else None
        entries.append(
            FileEntry(
                path=item.path,
                depth=item.depth,
                is_dir=item.is_dir,
                size=size,
                permissions=permissions,
                git_status=git_status,
            )
        )
    return entries


def build_app_state(
    args: InteractiveArgs, root_path: str | os.PathLike[str]
) -> AppState:
    """Scan ``root_path`` and expand directories down to ``args.expand_level``."""
    repo_status = load_status(root_path) if args.git_status else None
    entries = scan_directory(root_path, repo_status, args)
    if args.expand_level is not None:
        for entry in entries:
            if entry.is_dir and entry.depth < args.expand_level:
                entry.is_expanded = True
    return AppState(entries)


def _display_width(text: str) -> int:
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in "WF" else 1
    return width


def render_line(entry: FileEntry, args: InteractiveArgs, width: int) -> list[_Span]:
    """Lay out one entry as styled text spans for a row ``width`` columns wide."""
    spans: list[_Span] = []
    if args.git_status:
        if entry.git_status is not None:
            spans.append(
                _Span(f"{entry.git_status.symbol()} ", _STATUS_COLORS[entry.git_status])
            )
        else:
            spans.append(_Span("  "))
    if args.permissions:
        spans.append(_Span(f"{entry.permissions or _NO_PERMISSIONS} ", _DARK_GRAY))
    spans.append(_Span("    " * max(entry.depth - 1, 0)))
    if entry.is_dir:
        spans.append(_Span("▼ " if entry.is_expanded else "▶ "))
    else:
        spans.append(_Span("  "))
    if args.icons:
        icon, colour = get_icon_for_path(entry.path, entry.is_dir)
        spans.append(_Span(f"{icon} ", _ICON_COLOR_MAP.get(colour, colour)))
    if entry.is_dir:
        spans.append(_Span(entry.path.name, Color.BLUE, True))
    else:
        spans.append(_Span(entry.path.name))
    if args.size and entry.size is not None:
        size_str = format_size(entry.size)
        used = sum(_display_width(span.text) for span in spans)
        padding = max(width - used - len(size_str), 0)
        spans.append(_Span(" " * padding))
        spans.append(_Span(size_str, _DARK_GRAY))
    return spans


def _clip(text: str, columns: int) -> str:
    used = 0
    for index, char in enumerate(text):
        used += _display_width(char)
        if used > columns:
            return text[:index]
    return text


class _Palette:
    """Turns colours into curses attributes, allocating colour pairs on demand."""

    def __init__(self) -> None:
        self._enabled = curses.has_colors()
        self._pairs: dict[tuple[int, int], int] = {}
        self._default_fg, self._default_bg = -1, -1
        self._many = False
        if self._enabled:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                self._default_fg, self._default_bg = curses.COLOR_WHITE, curses.COLOR_BLACK
            self._many = curses.COLORS >= 16

    def _index(self, color: Color) -> tuple[int, bool]:
        code = color.value
        if code >= 90:
            return (code - 90 + 8, False) if self._many else (code - 90, True)
        return code - 30, False

    def _pair(self, fg: int, bg: int) -> int:
        key = (fg, bg)
        if key not in self._pairs:
            number = len(self._pairs) + 1
            if number >= curses.COLOR_PAIRS:
                return 0
            curses.init_pair(number, fg, bg)
            self._pairs[key] = curses.color_pair(number)
        return self._pairs[key]

    def attr(self, color: Color | None, bold: bool, highlighted: bool) -> int:
        attr = curses.A_BOLD if bold or highlighted else 0
        if not self._enabled:
            return attr | (curses.A_REVERSE if highlighted else 0)
        fg = self._default_fg
        if color is not None:
            fg, brighten = self._index(color)
            if brighten:
                attr |= curses.A_BOLD
        if highlighted and not self._many:
            return attr | curses.A_REVERSE | self._pair(fg, self._default_bg)
        bg = self._index(_DARK_GRAY)[0] if highlighted else self._default_bg
        return attr | self._pair(fg, bg)


def _draw(stdscr, palette: _Palette, state: AppState, args: InteractiveArgs) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    state._scroll_into_view(height)
    rows = state.visible_entries[state.offset : state.offset + height]
    for row, entry in enumerate(rows):
        highlighted = state.offset + row == state.selected
        if highlighted:
            with contextlib.suppress(curses.error):
                stdscr.addstr(row, 0, " " * max(width - 1, 0), palette.attr(None, False, True))
        prefix = _HIGHLIGHT_SYMBOL if highlighted else " " * len(_HIGHLIGHT_SYMBOL)
        column = 0
        for span in [_Span(prefix), *render_line(entry, args, width)]:
            if column >= width:
                break
            text = _clip(span.text, width - column)
            if text:
                with contextlib.suppress(curses.error):
                    stdscr.addstr(
                        row, column, text, palette.attr(span.color, span.bold, highlighted)
                    )
            column += _display_width(text)
    stdscr.refresh()


def _run_app(
    stdscr, state: AppState, args: InteractiveArgs
) -> tuple[PostExitAction, Path | None]:
    curses.raw()
    curses.noecho()
    stdscr.keypad(True)
    with contextlib.suppress(curses.error):
        curses.curs_set(0)
    with contextlib.suppress(curses.error, AttributeError):
        curses.set_escdelay(25)
    palette = _Palette()
    while True:
        _draw(stdscr, palette, state, args)
        key = stdscr.getch()
        if key == _CTRL_S:
            entry = state.selected_entry()
            if entry is not None:
                return PostExitAction.PRINT_PATH, entry.path
        elif key in (ord("q"), _ESCAPE):
            return PostExitAction.NONE, None
        elif key in (curses.KEY_DOWN, ord("j")):
            state.next()
        elif key in (curses.KEY_UP, ord("k")):
            state.previous()
        elif key in (curses.KEY_ENTER, 10, 13):
            entry = state.selected_entry()
            if entry is not None:
                if entry.is_dir:
                    state.toggle_selected_directory()
                else:
                    return PostExitAction.OPEN_FILE, entry.path


@contextlib.contextmanager
def _screen_on_terminal() -> Iterator[None]:
    """Draw on stderr while standard output is redirected away from the terminal."""
    if sys.stdout.isatty():
        yield
        return
    sys.stdout.flush()
    saved = os.dup(1)
    try:
        os.dup2(2, 1)
        yield
    finally:
        os.dup2(saved, 1)
        os.close(saved)


def run(args: InteractiveArgs) -> None:
    """Start the explorer on ``args.path`` and carry out the chosen exit action.

    Raises NotADirectoryError when the path is not a directory.
    """
    path = Path(args.path)
    if not path.is_dir():
        raise NotADirectoryError(f"'{path}' is not a directory.")
    root_path = path.resolve(strict=True)
    state = build_app_state(args, root_path)
    if curses is None:
        raise RuntimeError("the interactive explorer needs terminal (curses) support")

    with _screen_on_terminal():
        action, target = curses.wrapper(_run_app, state, args)

    if action is PostExitAction.OPEN_FILE and target is not None:
        editor = os.environ.get("EDITOR", "notepad" if os.name == "nt" else "vim")
        subprocess.run([editor, str(target)], check=False)
    elif action is PostExitAction.PRINT_PATH and target is not None:
        print(target)