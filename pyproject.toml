[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ignition"
version = "0.1.0"
description = "A small sparse-set entity component system for games"
requires-python = ">=3.10"
dependencies = []
keywords = ["ecs", "entity-component-system", "game-engine", "sparse-set"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ignition"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
