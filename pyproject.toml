[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitchanges"
version = "0.1.0"
description = "Detect, list and export file changes between Git branches or in a single commit, for CI pipelines"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "ci", "diff", "changes", "export"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
git-changes = "gitchanges.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gitchanges"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
