[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rads"
version = "0.1.0"
description = "Project model, starter templates and source generation for UI2, service and shell apps"
requires-python = ">=3.10"
keywords = ["rad", "ui2", "code-generation", "project-templates", "scaffolding"]
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
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rads"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
