"""Formatting helpers shared by the tree view and the interactive explorer."""

from __future__ import annotations

_KIB = 1024.0
_UNITS = (("TiB", _KIB**4), ("GiB", _KIB**3), ("MiB", _KIB**2), ("KiB", _KIB))

_PERMISSION_BITS = (0o400, 0o200, 0o100, 0o040, 0o020, 0o010, 0o004, 0o002, 0o001)
_PERMISSION_CHARS = "rwx" * 3


def format_size(size: int) -> str:
    """Format a byte count with binary prefixes, e.g. ``1.5 KiB``."""
    if size < _KIB:
        return f"{size} B"
    for unit, factor in _UNITS:
        if size >= factor:
            return f"{size / factor:.1f} {unit}"
    return f"{size} B"


def format_permissions(mode: int) -> str:
    """Render the permission bits of a Unix mode as ``rwxr-xr-x``."""
    return "".join(
        char if mode & bit else "-"
        for bit, char in zip(_PERMISSION_BITS, _PERMISSION_CHARS)
    )


def mode_string(mode: int, is_dir: bool) -> str:
    """Render a mode with its type marker, e.g. ``drwxr-xr-x``."""
    return ("d" if is_dir else "-") + format_permissions(mode)