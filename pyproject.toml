[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mgedit"
version = "0.1.0"
description = "In-memory buffers, windows, search, kill ring, undo, word commands and ctags tables for an Emacs-style text editor"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "emacs", "buffer", "kill-ring", "undo", "ctags", "search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mgedit"]

[tool.pytest.ini_options]
addopts = "-ra"
