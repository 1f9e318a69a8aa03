[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trafficsim"
version = "0.1.0"
description = "Discrete-time road traffic simulation with cars, bicycles, roads and junctions"
requires-python = ">=3.10"
dependencies = []
keywords = ["traffic", "simulation", "vehicles", "roads", "junctions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trafficsim = "trafficsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["trafficsim"]

[tool.pytest.ini_options]
addopts = "-ra"
