[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arenafighter"
version = "0.1.0"
description = "An isometric tile-map viewer built on a small entity-component-system core"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "ecs", "entity-component-system", "isometric", "tilemap", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
arenafighter = "arenafighter.game:main"

[tool.hatch.build.targets.wheel]
packages = ["arenafighter"]

[tool.pytest.ini_options]
addopts = "-ra"
