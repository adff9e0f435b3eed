"""Directory traversal honouring hidden-file and ``.gitignore`` rules."""

from __future__ import annotations

import os
import re
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

GITIGNORE = ".gitignore"


@dataclass(frozen=True)
class WalkEntry:
    """One path met during a walk; the root has depth 0."""

    path: Path
    depth: int
    is_dir: bool

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class _Pattern:
    regex: re.Pattern[str]
    negated: bool
    dir_only: bool
    anchored: bool

    def matches(self, relative: str, name: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        target = relative if self.anchored else name
        return self.regex.fullmatch(target) is not None


def _translate(glob: str) -> str:
    """Translate a gitignore glob into a regular expression."""
    out: list[str] = []
    i, n = 0, len(glob)
    while i < n:
        char = glob[i]
        if char == "*":
            if glob.startswith("**", i):
                at_start = i == 0 or glob[i - 1] == "/"
                after = i + 2
                if at_start and glob.startswith("/", after):
                    out.append("(?:.*/)?")
                    i = after + 1
                    continue
                if at_start and after == n:
                    out.append(".*")
                    i = after
                    continue
            out.append("[^/]*")
            i += 1
        elif char == "?":
            out.append("[^/]")
            i += 1
        elif char == "[":
            j = i + 1
            if j < n and glob[j] in "!^":
                j += 1
            if j < n and glob[j] == "]":
                j += 1
            while j < n and glob[j] != "]":
                j += 1
            if j >= n:
                out.append(re.escape(char))
                i += 1
                continue
            body = glob[i + 1 : j]
            if body.startswith("!"):
                body = "^" + body[1:]
            out.append("[" + body.replace("\\", "\\\\") + "]")
            i = j + 1
        elif char == "\\" and i + 1 < n:
            out.append(re.escape(glob[i + 1]))
            i += 2
        else:
            out.append(re.escape(char))
            i += 1
    return "".join(out)


def _parse_line(line: str) -> _Pattern | None:
    line = line.rstrip("\r")
    if not line or line.startswith("#"):
        return None
    stripped = line.rstrip(" ")
    if stripped.endswith("\\") and len(stripped) < len(line):
        stripped += " "
    line = stripped
    if not line:
        return None

    negated = False
    if line.startswith("!"):
        negated = True
        line = line[1:]
    elif line.startswith(("\\!", "\\#")):
        line = line[1:]

    dir_only = line.endswith("/")
    if dir_only:
        line = line[:-1]
    if not line:
        return None
    anchored = "/" in line
    if line.startswith("/"):
        line = line[1:]
    if not line:
        return None
    return _Pattern(re.compile(_translate(line)), negated, dir_only, anchored)


class IgnoreRules:
    """The patterns of one directory's ``.gitignore``, chained to its parent's."""

    def __init__(
        self,
        directory: str | os.PathLike[str],
        patterns: tuple[_Pattern, ...] | list[_Pattern] = (),
        parent: IgnoreRules | None = None,
    ) -> None:
        self.directory = Path(os.path.abspath(directory))
        self.patterns = tuple(patterns)
        self.parent = parent

    @classmethod
    def from_directory(
        cls, directory: str | os.PathLike[str], parent: IgnoreRules | None = None
    ) -> IgnoreRules:
        """Read ``directory/.gitignore``; a missing file gives no patterns."""
        try:
            text = (Path(directory) / GITIGNORE).read_text(
                encoding="utf-8", errors="replace"
            )
        except OSError:
            text = ""
        patterns = [p for p in map(_parse_line, text.splitlines()) if p is not None]
        return cls(directory, patterns, parent)

    def is_ignored(self, path: str | os.PathLike[str], is_dir: bool) -> bool:
        """Tell whether ``path`` is excluded; deeper rules win over shallower ones."""
        absolute = Path(os.path.abspath(path))
        rules: IgnoreRules | None = self
        while rules is not None:
            verdict = rules._verdict(absolute, is_dir)
            if verdict is not None:
                return verdict
            rules = rules.parent
        return False

    def _verdict(self, absolute: Path, is_dir: bool) -> bool | None:
        try:
            relative = absolute.relative_to(self.directory).as_posix()
        except ValueError:
            return None
        if relative == ".":
            return None
        for pattern in reversed(self.patterns):
            if pattern.matches(relative, absolute.name, is_dir):
                return not pattern.negated
        return None


def _initial_rules(root: Path) -> IgnoreRules | None:
    """Build the rule chain from the enclosing repository down to ``root``."""
    absolute = Path(os.path.abspath(root))
    chain = [absolute]
    for candidate in chain[0].parents:
        if (chain[-1] / ".git").exists():
            break
        chain.append(candidate)
    if not (chain[-1] / ".git").exists():
        return None
    rules: IgnoreRules | None = None
    for directory in reversed(chain):
        rules = IgnoreRules.from_directory(directory, rules)
    return rules


def _walk_dir(
    directory: Path,
    depth: int,
    hidden: bool,
    rules: IgnoreRules | None,
    max_depth: int | None,
) -> Iterator[WalkEntry | OSError]:
    try:
        with os.scandir(directory) as scan:
            children = sorted(scan, key=lambda child: child.name)
    except OSError as error:
        yield error
        return

    for child in children:
        if hidden and child.name.startswith("."):
            continue
        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        path = directory / child.name
        if rules is not None and rules.is_ignored(path, is_dir):
            continue
        yield WalkEntry(path, depth, is_dir)
        if is_dir and (max_depth is None or depth < max_depth):
            child_rules = (
                IgnoreRules.from_directory(path, rules) if rules is not None else None
            )
            yield from _walk_dir(path, depth + 1, hidden, child_rules, max_depth)


def walk(
    root: str | os.PathLike[str],
    hidden: bool = True,
    gitignore: bool = False,
    max_depth: int | None = None,
) -> Iterator[WalkEntry | OSError]:
    """Walk ``root`` depth first, in name order, starting with the root itself.

    ``hidden`` skips dot files; ``gitignore`` applies ``.gitignore`` files when
    the root lies inside a Git repository. An error met while reading a
    directory is yielded in place of its children.
    """
    root_path = Path(root)
    try:
        info = root_path.stat()
    except OSError as error:
        yield error
        return
    root_is_dir = stat.S_ISDIR(info.st_mode)
    yield WalkEntry(root_path, 0, root_is_dir)
    if not root_is_dir or max_depth == 0:
        return
    rules = _initial_rules(root_path) if gitignore else None
    yield from _walk_dir(root_path, 1, hidden, rules, max_depth)