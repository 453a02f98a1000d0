[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "damperopt"
version = "0.1.0"
description = "Bayesian optimisation of shock-absorber damping parameters on a half-car road simulation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "damper",
    "suspension",
    "vehicle-dynamics",
    "bayesian-optimization",
    "gaussian-process",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
damperopt = "damperopt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["damperopt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
