[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "obvtools"
version = "0.1.0"
description = "Board view support tools: configuration files, file history, search, hull geometry, annotations, key bindings and board measurement data"
requires-python = ">=3.10"
dependencies = []
keywords = ["pcb", "boardview", "electronics", "repair", "configuration", "convex-hull"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
obvtools = "obvtools.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["obvtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
