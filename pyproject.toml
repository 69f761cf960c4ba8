[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "claudeloop"
version = "0.1.0"
description = "Building blocks for an autonomous AI development loop: principles, stream-json parsing, conflict detection and command-line flags"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "ai",
    "automation",
    "development-loop",
    "principles",
    "stream-json",
    "cli",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["claudeloop"]

[tool.hatch.build.targets.sdist]
include = [
    "claudeloop",
    "tests",
    "README.md",
    "pyproject.toml",
]

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
