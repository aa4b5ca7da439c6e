[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raiinet"
version = "1.0.0"
description = "A two-player terminal strategy game of data links, viruses and server ports"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "board-game", "strategy", "terminal", "two-player"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
raiinet = "raiinet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["raiinet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
