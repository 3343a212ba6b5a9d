[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boxengine"
version = "0.1.0"
description = "A small component-based 2D game engine on pygame with JSON levels and configurable keyboard and controller input"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "engine", "pygame", "components", "entity", "input", "sprites", "json"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
boxengine = "boxengine.engine:main"

[tool.hatch.build.targets.wheel]
packages = ["boxengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
