[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubdungeon"
version = "0.1.0"
description = "A raycasting dungeon crawler with procedurally generated maps, loot chests and a pursuing enemy"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "dungeon", "procedural-generation", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubdungeon = "cubdungeon.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubdungeon"]

[tool.pytest.ini_options]
addopts = "-ra"
