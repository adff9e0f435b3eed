from pathlib import Path

import pytest

from lstr.options import ColorChoice, InteractiveArgs, ViewArgs


@pytest.mark.parametrize("choice", list(ColorChoice))
def test_parse_round_trips_display(choice):
    assert ColorChoice.parse(str(choice)) is choice


def test_parse_known_value():
    assert ColorChoice.parse("never") is ColorChoice.NEVER


@pytest.mark.parametrize("value", ["", "Always", "yes", "auto "])
def test_parse_rejects_unknown_values(value):
    with pytest.raises(ValueError):
        ColorChoice.parse(value)


def test_parse_error_lists_every_choice():
    with pytest.raises(ValueError) as excinfo:
        ColorChoice.parse("sometimes")
    message = str(excinfo.value)
    assert all(choice.value in message for choice in ColorChoice)


def test_view_args_defaults():
    args = ViewArgs()
    assert args.path == Path(".")
    assert args.color is ColorChoice.AUTO
    assert args.level is None
    assert not any(
        (args.dirs_only, args.size, args.permissions, args.all,
         args.gitignore, args.git_status, args.icons)
    )


def test_interactive_args_defaults():
    args = InteractiveArgs()
    assert args.path == Path(".")
    assert args.expand_level is None
    assert not any(
        (args.all, args.gitignore, args.git_status, args.icons,
         args.size, args.permissions)
    )


def test_args_keep_given_values(tmp_path):
    args = ViewArgs(path=tmp_path, level=2, color=ColorChoice.ALWAYS, all=True)
    assert args.path == tmp_path
    assert args.level == 2
    assert args.color is ColorChoice.ALWAYS
    assert args.all is True