[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dronerescue"
version = "0.1.0"
description = "Emergency drone coordination simulation: a TCP server that assigns rescue missions to drones, with a live pygame map"
requires-python = ">=3.10"
keywords = ["drone", "simulation", "rescue", "coordination", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
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
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dronerescue-server = "dronerescue.server:main"
dronerescue-client = "dronerescue.client:main"

[tool.hatch.build.targets.wheel]
packages = ["dronerescue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
