"""Settings for the tree view and the interactive explorer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ColorChoice(Enum):
    """When to colourise output."""

    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(value: str) -> ColorChoice:
        """Parse a command-line value; raise ValueError if it is not recognised."""
        try:
            return ColorChoice(value)
        except ValueError:
            choices = ", ".join(choice.value for choice in ColorChoice)
            raise ValueError(
                f"invalid value '{value}' [possible values: {choices}]"
            ) from None


@dataclass
class ViewArgs:
    """Options of the classic tree view."""

    path: Path = Path(".")
    color: ColorChoice = ColorChoice.AUTO
    level: int | None = None
    dirs_only: bool = False
    size: bool = False
    permissions: bool = False
    all: bool = False
    gitignore: bool = False
    git_status: bool = False
    icons: bool = False


@dataclass
class InteractiveArgs:
    """Options of the interactive explorer."""

    path: Path = Path(".")
    all: bool = False
    gitignore: bool = False
    git_status: bool = False
    icons: bool = False
    size: bool = False
    permissions: bool = False
    expand_level: int | None = None