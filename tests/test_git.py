import subprocess
from pathlib import Path

from lstr.git import FileStatus, GitRepoStatus, load_status, parse_porcelain


def _git(cwd, *args):
    subprocess.run(
        [
            "git",
            "-c",
            "user.email=test@example.com",
            "-c",
            "user.name=Test User",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


def test_symbols_match_statuses():
    cache = parse_porcelain(
        " M modified.txt\0A  added.txt\0 D deleted.txt\0R  renamed.txt\0old.txt\0"
        " T changed_type\0?? untracked.txt\0UU conflicted.txt\0"
    )
    symbols = {path.as_posix(): status.symbol() for path, status in cache.items()}
    assert symbols == {
        "modified.txt": "M",
        "added.txt": "A",
        "deleted.txt": "D",
        "renamed.txt": "R",
        "changed_type": "T",
        "untracked.txt": "?",
        "conflicted.txt": "C",
    }


def test_parse_porcelain_basic_codes():
    output = " M changed.txt\0A  added.txt\0?? new/file.txt\0 D gone.txt\0"
    assert parse_porcelain(output) == {
        Path("changed.txt"): FileStatus.MODIFIED,
        Path("added.txt"): FileStatus.NEW,
        Path("new/file.txt"): FileStatus.UNTRACKED,
        Path("gone.txt"): FileStatus.DELETED,
    }


def test_parse_porcelain_conflicts_take_precedence():
    cache = parse_porcelain("UU both.txt\0AA twice.txt\0")
    assert cache == {
        Path("both.txt"): FileStatus.CONFLICTED,
        Path("twice.txt"): FileStatus.CONFLICTED,
    }


def test_parse_porcelain_index_before_worktree():
    cache = parse_porcelain("AD staged.txt\0MM edited.txt\0 T link\0")
    assert cache[Path("staged.txt")] is FileStatus.NEW
    assert cache[Path("edited.txt")] is FileStatus.MODIFIED
    assert cache[Path("link")] is FileStatus.TYPECHANGE


def test_parse_porcelain_rename_consumes_original_path():
    cache = parse_porcelain("R  new_name.txt\0old_name.txt\0 M other.txt\0")
    assert cache == {
        Path("new_name.txt"): FileStatus.RENAMED,
        Path("other.txt"): FileStatus.MODIFIED,
    }


def test_parse_porcelain_skips_ignored_and_empty():
    assert parse_porcelain("!! build.log\0") == {}
    assert parse_porcelain("") == {}


def test_status_for_strips_root(tmp_path):
    status = GitRepoStatus(cache={Path("a/b.txt"): FileStatus.NEW}, root=tmp_path)
    assert status.status_for(tmp_path / "a" / "b.txt") is FileStatus.NEW
    assert status.status_for(tmp_path / "a") is None
    assert status.status_for(tmp_path.parent / "elsewhere.txt") is None


def test_load_status_outside_repository(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    assert load_status(tmp_path) is None


def test_load_status_reads_repository(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    _git(tmp_path, "init", "-q")
    (tmp_path / "committed.txt").write_text("initial content")
    _git(tmp_path, "add", "committed.txt")
    _git(tmp_path, "commit", "-q", "-m", "initial commit")

    (tmp_path / "committed.txt").write_text("modified content")
    (tmp_path / "staged.txt").write_text("staged")
    _git(tmp_path, "add", "staged.txt")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "untracked.txt").write_text("untracked")

    status = load_status(tmp_path / "sub")
    assert status is not None
    assert status.root == tmp_path.resolve()
    assert status.cache == {
        Path("committed.txt"): FileStatus.MODIFIED,
        Path("staged.txt"): FileStatus.NEW,
        Path("sub/untracked.txt"): FileStatus.UNTRACKED,
    }
    assert status.status_for(status.root / "staged.txt") is FileStatus.NEW