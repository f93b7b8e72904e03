[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinycraft"
version = "0.1.0"
description = "A tiny block-building voxel sandbox with instanced OpenGL rendering"
requires-python = ">=3.10"
keywords = ["voxel", "sandbox", "opengl", "game", "blocks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "numpy",
    "pyglet",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tinycraft = "tinycraft.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tinycraft"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
