[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jutland"
version = "0.1.0"
description = "Game model for a naval real-time strategy game: ships, weapons, maps, path finding and mission state"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "strategy", "naval", "rts", "pathfinding", "json5"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jutland"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
