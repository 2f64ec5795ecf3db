[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mercadosim"
version = "0.1.0"
description = "Building blocks for a minute-by-minute supermarket checkout simulation: customers, queues, registers, statistics and reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "supermarket", "queues", "checkout", "discrete-time"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[tool.hatch.build.targets.wheel]
packages = ["mercadosim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
