[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "culiacan"
version = "0.2.0"
description = "Simulation core for a real-time strategy game: game state, campaign saves, political pressure, multiplayer lobby, pathing and formations"
requires-python = ">=3.10"
dependencies = []
keywords = ["rts", "strategy", "simulation", "game", "pathfinding", "save-game"]
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
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["culiacan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
