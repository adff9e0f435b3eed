"""Nerd Font icons and display colours for files and directories."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import PurePath


class Color(Enum):
    """Terminal colours; each value is the ANSI SGR foreground code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    BRIGHT_BLACK = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97


FOLDER_ICON = "\uf07b"
FILE_ICON = "\uf15b"
RUST_ICON = "\ue7a8"
LOCK_ICON = "\uf023"
GIT_ICON = "\ue702"
LICENSE_ICON = "\uf0e3"
README_ICON = "\uf48a"
DOCKER_ICON = "\uf308"
MAKEFILE_ICON = "\ue779"
PYTHON_ICON = "\ue606"
JAVASCRIPT_ICON = "\ue74e"
TYPESCRIPT_ICON = "\ue628"
JAVA_ICON = "\ue738"
HTML_ICON = "\ue736"
CSS_ICON = "\ue749"
TOML_ICON = "\ue6b2"
JSON_ICON = "\ue60b"
YAML_ICON = "\U000f05ca"
ARCHIVE_ICON = "\uf410"
MARKDOWN_ICON = "\ue609"
SHELL_ICON = "\uf489"

_FILENAME_ICONS = {
    "Cargo.toml": TOML_ICON,
    "Cargo.lock": LOCK_ICON,
    ".gitignore": GIT_ICON,
    ".gitattributes": GIT_ICON,
    "LICENSE": LICENSE_ICON,
    "README.md": README_ICON,
    "Dockerfile": DOCKER_ICON,
    "Makefile": MAKEFILE_ICON,
    "makefile": MAKEFILE_ICON,
}

_EXTENSION_ICONS = {
    "rs": RUST_ICON,
    "py": PYTHON_ICON,
    "js": JAVASCRIPT_ICON,
    "ts": TYPESCRIPT_ICON,
    "tsx": TYPESCRIPT_ICON,
    "java": JAVA_ICON,
    "html": HTML_ICON,
    "css": CSS_ICON,
    "scss": CSS_ICON,
    "toml": TOML_ICON,
    "json": JSON_ICON,
    "yaml": YAML_ICON,
    "yml": YAML_ICON,
    "zip": ARCHIVE_ICON,
    "gz": ARCHIVE_ICON,
    "tar": ARCHIVE_ICON,
    "md": MARKDOWN_ICON,
    "sh": SHELL_ICON,
    "bash": SHELL_ICON,
    "zsh": SHELL_ICON,
}

_ICON_COLORS = {
    RUST_ICON: Color.RED,
    GIT_ICON: Color.RED,
    PYTHON_ICON: Color.YELLOW,
    JAVASCRIPT_ICON: Color.YELLOW,
    README_ICON: Color.BRIGHT_BLACK,
    TOML_ICON: Color.BRIGHT_YELLOW,
    YAML_ICON: Color.BRIGHT_YELLOW,
    JSON_ICON: Color.YELLOW,
}


def get_icon_for_path(path: str | os.PathLike[str], is_dir: bool) -> tuple[str, Color]:
    """Return the icon and colour for ``path``.

    Well-known file names take precedence over the file extension.
    """
    if is_dir:
        return FOLDER_ICON, Color.BLUE

    pure = PurePath(path)
    icon = _FILENAME_ICONS.get(pure.name)
    if icon is None:
        extension = pure.suffix[1:] if pure.suffix else ""
        icon = _EXTENSION_ICONS.get(extension, FILE_ICON)
    return icon, _ICON_COLORS.get(icon, Color.WHITE)