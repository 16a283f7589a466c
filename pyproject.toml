[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "utui"
version = "0.1.0"
description = "Show the latest human comments, reviews and review comments on your GitHub pull requests"
requires-python = ">=3.10"
keywords = ["github", "pull-requests", "code-review", "cli", "comments"]
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
]
dependencies = [
    "requests",
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
utui = "utui.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["utui"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
