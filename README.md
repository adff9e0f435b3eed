# lstr

A minimalist directory tree viewer for the terminal. It prints a directory as a
tree and can add file sizes, permissions, Nerd Font icons and Git status to each
entry. An interactive mode lets you browse the tree with the keyboard.

## Installation

```
pip install .
```

No third-party packages are needed. Git status needs the `git` command on
`PATH`; the interactive mode needs the standard `curses` module.

## Classic tree view

```
lstr [OPTIONS] [PATH]
```

`PATH` defaults to the current directory. Entries are listed depth first, in
name order, each indented by its depth.

| Option | Meaning |
| --- | --- |
| `-L`, `--level N` | Descend at most `N` levels |
| `-d`, `--dirs-only` | Show directories only |
| `-s`, `--size` | Show file sizes after the name, e.g. `(1.5 KiB)` |
| `-p`, `--permissions` | Show permissions, e.g. `-rw-r--r--` (`----------` where they cannot be read) |
| `-a`, `--all` | Include hidden (dot) files |
| `-g`, `--gitignore` | Skip paths excluded by `.gitignore` files, when the path lies inside a Git repository |
| `-G`, `--git-status` | Show each entry's Git status |
| `--icons` | Show file icons (needs a Nerd Font) |
| `--color WHEN` | `always`, `auto` (the default) or `never` |
| `-V`, `--version` | Print the version |

With `--color auto`, colour is used when standard output is a terminal;
`CLICOLOR_FORCE` (non-zero) forces it on, and `NO_COLOR` or `CLICOLOR=0`
turn it off.

The listing ends with a summary line such as `3 directories, 12 files`.
If `PATH` is not a directory, `lstr` prints an error and exits with status 1.

Git status is shown as a single letter in front of each entry:

| Letter | Meaning |
| --- | --- |
| `M` | modified |
| `A` | added |
| `D` | deleted |
| `R` | renamed |
| `T` | type changed |
| `?` | untracked |
| `C` | conflicted |

## Interactive mode

```
lstr interactive [OPTIONS] [PATH]
lstr i [OPTIONS] [PATH]
```

This mode accepts `-a`, `-g`, `-G`, `--icons`, `-s` and `-p`, and also
`--expand-level N`, which opens directories above depth `N` at start.

| Key | Action |
| --- | --- |
| `j` / Down | Move down (wraps to the top) |
| `k` / Up | Move up (wraps to the bottom) |
| Enter | Expand or collapse a directory, or open a file in `$EDITOR` (`vim` by default, `notepad` on Windows) |
| Ctrl-S | Quit and print the selected path |
| `q` / Esc | Quit |

When standard output is redirected, the explorer draws on standard error, so
the path chosen with Ctrl-S can be captured by the shell:

```
cd "$(lstr i)"
```

## Using it from Python

- `lstr.view.run(ViewArgs(...), out=None, err=None)` prints a tree to the given
  streams (standard output and error by default).
- `lstr.walk.walk(root, hidden=True, gitignore=False, max_depth=None)` yields
  `WalkEntry` objects (path, depth, is_dir), or the `OSError` met while reading
  a directory.
- `lstr.git.load_status(path)` returns a `GitRepoStatus` for the enclosing
  repository, or `None` outside one.
- `lstr.utils.format_size` and `lstr.utils.format_permissions` format sizes and
  mode bits; `lstr.icons.get_icon_for_path` picks an icon and colour.

## Limitations

- Only `.gitignore` files are read for `-g`; `.git/info/exclude`, global
  excludes and `.ignore` files are not.
- The tree view has no mouse support, and the interactive mode cannot run
  where `curses` is unavailable.