[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actionexpr"
version = "0.1.0"
description = "Types for workflow expression values, built-in function and context signatures, and validation of branch, tag and path glob filters"
requires-python = ">=3.10"
dependencies = []
keywords = ["workflow", "expressions", "type-checking", "glob", "lint"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["actionexpr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
