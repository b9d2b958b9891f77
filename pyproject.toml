[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terto3d"
version = "0.1.0"
description = "A small textured raycasting first-person explorer driven by .cub map files"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "first-person", "pygame", "map", "maze"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
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
terto3d = "terto3d.game:main"

[tool.hatch.build.targets.wheel]
packages = ["terto3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
