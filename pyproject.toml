[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dwarfline"
version = "0.1.0"
description = "Map program counters to file, line and function names using DWARF debug sections"
requires-python = ">=3.10"
dependencies = []
keywords = ["dwarf", "debug", "debuginfo", "line numbers", "symbolization", "inlining"]
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
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dwarfline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
