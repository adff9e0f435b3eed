from pathlib import Path

import pytest

from lstr.git import FileStatus, GitRepoStatus
from lstr.icons import RUST_ICON, README_ICON, Color
from lstr.options import InteractiveArgs
from lstr.tui import (
    AppState,
    FileEntry,
    build_app_state,
    render_line,
    run,
    scan_directory,
)


def make_state() -> AppState:
    entries = [
        FileEntry(Path("src"), 1, True, permissions="drwxr-xr-x"),
        FileEntry(
            Path("src/main.rs"),
            2,
            False,
            size=1024,
            permissions="-rw-r--r--",
            git_status=FileStatus.MODIFIED,
        ),
        FileEntry(Path("README.md"), 1, False, size=512, permissions="-rw-r--r--"),
    ]
    state = AppState(entries)
    state.selected = 0
    return state


def text_of(spans) -> str:
    return "".join(span.text for span in spans)


def test_navigation():
    state = make_state()
    assert state.selected == 0
    state.next()
    assert state.selected == 1
    state.next()
    assert state.selected == 0
    state.previous()
    assert state.selected == 1
    state.previous()
    assert state.selected == 0


def test_toggle_directory():
    state = make_state()
    assert len(state.visible_entries) == 2
    state.selected = 0
    state.toggle_selected_directory()
    assert len(state.visible_entries) == 3
    assert state.visible_entries[1].path == Path("src/main.rs")
    assert state.selected == 0
    state.toggle_selected_directory()
    assert len(state.visible_entries) == 2


def test_get_selected_entry():
    state = make_state()
    state.selected = 1
    selected = state.selected_entry()
    assert selected is not None
    assert selected.path == Path("README.md")


def test_empty_state_has_no_selection():
    state = AppState([])
    state.next()
    state.previous()
    state.toggle_selected_directory()
    assert state.selected is None
    assert state.selected_entry() is None


def test_render_file_line_plain():
    entry = FileEntry(Path("src/main.rs"), 2, False)
    assert text_of(render_line(entry, InteractiveArgs(), 80)) == "      main.rs"


def test_render_directory_markers():
    entry = FileEntry(Path("src"), 1, True)
    spans = render_line(entry, InteractiveArgs(), 80)
    assert text_of(spans) == "▶ src"
    assert spans[-1].color is Color.BLUE and spans[-1].bold
    entry.is_expanded = True
    assert text_of(render_line(entry, InteractiveArgs(), 80)) == "▼ src"


def test_render_git_status_column():
    args = InteractiveArgs(git_status=True)
    modified = FileEntry(Path("a.txt"), 1, False, git_status=FileStatus.MODIFIED)
    spans = render_line(modified, args, 80)
    assert spans[0].text == "M "
    assert spans[0].color is Color.YELLOW
    clean = render_line(FileEntry(Path("b.txt"), 1, False), args, 80)
    assert clean[0].text == "  "
    assert clean[0].color is None


def test_render_missing_permissions():
    args = InteractiveArgs(permissions=True)
    spans = render_line(FileEntry(Path("a.txt"), 1, False), args, 80)
    assert spans[0].text == "---------- "


def test_render_size_is_right_aligned():
    entry = FileEntry(Path("a.txt"), 1, False, size=1024)
    text = text_of(render_line(entry, InteractiveArgs(size=True), 40))
    assert len(text) == 40
    assert text.startswith("  a.txt ")
    assert text.endswith("1.0 KiB")


def test_render_icons():
    args = InteractiveArgs(icons=True)
    rust = render_line(FileEntry(Path("main.rs"), 1, False), args, 80)
    assert (rust[2].text, rust[2].color) == (RUST_ICON + " ", Color.RED)
    readme = render_line(FileEntry(Path("README.md"), 1, False), args, 80)
    assert (readme[2].text, readme[2].color) == (README_ICON + " ", Color.WHITE)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "dir1").mkdir()
    (tmp_path / "dir1" / "b.txt").write_text("")
    (tmp_path / ".hidden").write_text("")
    return tmp_path


def summary(root: Path, entries):
    return [(e.path.relative_to(root).as_posix(), e.depth, e.is_dir) for e in entries]


def test_scan_directory_lists_in_order(tree: Path):
    entries = scan_directory(tree, None, InteractiveArgs(size=True))
    assert summary(tree, entries) == [
        ("a.txt", 1, False),
        ("dir1", 1, True),
        ("dir1/b.txt", 2, False),
    ]
    assert entries[0].size == 5
    assert entries[1].size is None
    assert entries[0].permissions is None


def test_scan_directory_all_includes_hidden(tree: Path):
    entries = scan_directory(tree, None, InteractiveArgs(all=True))
    assert summary(tree, entries)[0] == (".hidden", 1, False)


def test_scan_directory_permissions(tree: Path):
    entries = scan_directory(tree, None, InteractiveArgs(permissions=True))
    by_name = {e.path.name: e.permissions for e in entries}
    assert len(by_name["a.txt"]) == 10
    assert by_name["a.txt"].startswith("-")


def test_scan_directory_git_status(tmp_path: Path):
    root = tmp_path.resolve()
    (root / "a.txt").write_text("x")
    (root / "b.txt").write_text("y")
    repo = GitRepoStatus(cache={Path("a.txt"): FileStatus.UNTRACKED}, root=root)
    entries = scan_directory(root, repo, InteractiveArgs(git_status=True))
    assert [e.git_status for e in entries] == [FileStatus.UNTRACKED, None]


def test_build_app_state_expand_level(tmp_path: Path):
    (tmp_path / "dir1" / "sub").mkdir(parents=True)
    (tmp_path / "dir1" / "sub" / "f.txt").write_text("")

    collapsed = build_app_state(InteractiveArgs(), tmp_path)
    assert [e.path.name for e in collapsed.visible_entries] == ["dir1"]
    assert collapsed.selected == 0

    expanded = build_app_state(InteractiveArgs(expand_level=2), tmp_path)
    assert [e.path.name for e in expanded.visible_entries] == ["dir1", "sub"]


def test_run_rejects_missing_directory(tmp_path: Path):
    with pytest.raises(NotADirectoryError, match="is not a directory"):
        run(InteractiveArgs(path=tmp_path / "nonexistent"))