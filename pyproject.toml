[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "monads"
version = "0.1.0"
description = "Option, Result and State containers with JSON, binary and SQL value conversion."
requires-python = ">=3.10"
dependencies = []
keywords = ["option", "result", "monad", "functional", "state", "gob", "sql"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["monads"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
