[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "partitioner"
version = "0.1.0"
description = "Grid-indexed placement instances split into bit-size-limited partitions by several heuristics"
requires-python = ">=3.10"
keywords = ["eda", "partitioning", "placement", "clustering", "spatial-index"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]
dependencies = [
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
partitioner = "partitioner.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["partitioner"]

[tool.pytest.ini_options]
addopts = "-ra"
