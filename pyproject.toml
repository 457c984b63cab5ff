[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "itemgraphs"
version = "0.1.0"
description = "Compact in-memory storage of edge-labelled graphs as itemset-compressed edge-id sets, with FP-growth mining and hybrid representations"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "itemset", "fp-growth", "frequent-pattern", "compression", "graph-store"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["itemgraphs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
