[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "brewtui"
version = "0.1.0"
description = "A small framework for terminal user interfaces built around a model, update and view loop"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["tui", "terminal", "cli", "ansi", "console", "keyboard", "mouse"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
brewtui-basics = "brewtui.tutorial_basics:main"
brewtui-status = "brewtui.tutorial_commands:main"

[tool.setuptools]
packages = ["brewtui"]

[tool.pytest.ini_options]
addopts = "-ra"
