[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "srcgit"
version = "0.1.0"
description = "Building blocks for a friendly Git front end: terminal views, progress bars, rebase todo parsing, revision patterns and git settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "version-control", "terminal", "rebase", "progress", "ssh-signing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["srcgit"]

[tool.hatch.build.targets.sdist]
include = ["srcgit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
