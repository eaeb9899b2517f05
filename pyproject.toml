[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "emberquest"
version = "0.1.0"
description = "Game-state core of a tile-based role-playing game: config loading, entities, inventory, HUD, camera and mobs"
requires-python = ">=3.10"
dependencies = []
keywords = ["rpg", "game", "ecs", "tilemap", "inventory", "config"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["emberquest*"]

[tool.pytest.ini_options]
addopts = "-ra"
