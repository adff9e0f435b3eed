"""Git working-tree status lookup for annotating listed files."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileStatus(Enum):
    """A simplified Git status of a single file."""

    MODIFIED = "M"
    NEW = "A"
    DELETED = "D"
    RENAMED = "R"
    TYPECHANGE = "T"
    UNTRACKED = "?"
    CONFLICTED = "C"

    def symbol(self) -> str:
        """Return the one-character marker for this status."""
        return self.value


@dataclass
class GitRepoStatus:
    """Statuses keyed by path relative to the canonical repository root."""

    cache: dict[Path, FileStatus] = field(default_factory=dict)
    root: Path = Path(".")

    def status_for(self, path: str | os.PathLike[str]) -> FileStatus | None:
        """Return the status of an absolute ``path``, or None if it has none."""
        try:
            relative = Path(path).relative_to(self.root)
        except ValueError:
            return None
        return self.cache.get(relative)


_CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

_INDEX_STATUSES = {
    "A": FileStatus.NEW,
    "M": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
    "T": FileStatus.TYPECHANGE,
}

_WORKTREE_STATUSES = {
    "M": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
    "T": FileStatus.TYPECHANGE,
}


def _status_from_code(code: str) -> FileStatus | None:
    if code in _CONFLICT_CODES:
        return FileStatus.CONFLICTED
    if code == "??":
        return FileStatus.UNTRACKED
    if code == "!!":
        return None
    index, worktree = code[0], code[1]
    if index in _INDEX_STATUSES:
        return _INDEX_STATUSES[index]
    return _WORKTREE_STATUSES.get(worktree)


def parse_porcelain(output: str) -> dict[Path, FileStatus]:
    """Parse NUL-separated ``git status --porcelain=v1 -z`` output."""
    cache: dict[Path, FileStatus] = {}
    fields = iter(output.split("\0"))
    for record in fields:
        if len(record) < 4:
            continue
        code, name = record[:2], record[3:]
        if "R" in code or "C" in code:
            # Renames and copies are followed by the original path.
            next(fields, None)
        status = _status_from_code(code)
        if status is not None:
            cache[Path(name)] = status
    return cache


def _git(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="surrogateescape",
    )


def load_status(start_path: str | os.PathLike[str]) -> GitRepoStatus | None:
    """Find the repository containing ``start_path`` and read its file statuses.

    Returns None when there is no repository with a working tree.
    Raises RuntimeError when the status of a found repository cannot be read.
    """
    try:
        found = _git(Path(start_path), "rev-parse", "--show-toplevel")
    except OSError:
        return None
    toplevel = found.stdout.rstrip("\n")
    if found.returncode != 0 or not toplevel:
        return None

    root = Path(toplevel).resolve(strict=True)
    result = _git(
        root,
        "status",
        "--porcelain=v1",
        "-z",
        "--untracked-files=all",
        "--ignored=no",
        "--no-renames",
    )
    if result.returncode != 0:
        raise RuntimeError(f"git status failed: {result.stderr.strip()}")
    return GitRepoStatus(cache=parse_porcelain(result.stdout), root=root)