[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lstr"
version = "0.2.0"
description = "A minimalist directory tree viewer with an interactive explorer."
requires-python = ">=3.10"
dependencies = []
keywords = ["ls", "tree", "filesystem", "command-line", "git"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: File Managers",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lstr = "lstr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lstr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
