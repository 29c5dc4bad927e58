[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "transitroute"
version = "0.1.0"
description = "Multi-objective route planning over GTFS transit feeds, weighing fare, travel time and transfers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gtfs", "transit", "routing", "dijkstra", "public transport"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
transitroute = "transitroute.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["transitroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
