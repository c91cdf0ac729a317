[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpart"
version = "0.1.0"
description = "Graph and mesh file handling, node-separator refinement and fill-in analysis for sparse graph partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph partitioning",
    "vertex separator",
    "fill-in",
    "symbolic factorization",
    "sparse matrix",
    "mesh",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gpart-cmpfillin = "gpart.cmpfillin:main"

[tool.hatch.build.targets.wheel]
packages = ["gpart"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
