[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "halligalli"
version = "0.1.0"
description = "A networked Halli Galli card game server with the game rules, deck handling and JSON messaging."
requires-python = ">=3.10"
dependencies = []
keywords = ["halli galli", "card game", "board game", "game server", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
halligalli-server = "halligalli.server:main"

[tool.hatch.build.targets.wheel]
packages = ["halligalli"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
