[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brewdock"
version = "0.1.0"
description = "Building blocks for a Homebrew bottle installer front end: layout, locking, errors, hints, logging, progress, output rendering and argument parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["homebrew", "bottle", "package-manager", "installer", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: MacOS",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["brewdock"]

[tool.hatch.build.targets.sdist]
include = ["brewdock", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
