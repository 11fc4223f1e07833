[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linetrace"
version = "0.1.0"
description = "Line-tracing controller for a two-wheeled robot on a simulated board: odometry, cubic-curve following, PID loops and a small console formatter."
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "line tracing", "odometry", "pid", "bezier", "control", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
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
test = ["pytest", "hypothesis"]

[project.scripts]
linetrace = "linetrace.app:main"

[tool.hatch.build.targets.wheel]
packages = ["linetrace"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
