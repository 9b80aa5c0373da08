[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainfreeze"
version = "0.1.0"
description = "Parse the options of a blockchain data extraction run: block specifications, chunks, schemas and output settings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "blockchain",
    "ethereum",
    "extraction",
    "block-range",
    "argparse",
    "parquet",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chainfreeze"]

[tool.hatch.build.targets.sdist]
include = ["chainfreeze", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
