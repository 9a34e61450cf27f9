[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "querycrafter"
version = "0.1.0"
description = "Building blocks for a terminal SQL query tool: actions, autocomplete, a small vim-style editor and an SQL language-server launcher"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "database", "autocomplete", "tui", "vim", "lsp"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sql-lsp-wrapper = "querycrafter.lsp_wrapper:main"

[tool.hatch.build.targets.wheel]
packages = ["querycrafter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
