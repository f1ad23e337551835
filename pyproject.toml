[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "revindex"
version = "0.1.0"
description = "Word search with context over text files, plus printf formatting, a text console and low-level helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["reverse index", "search", "text", "word index", "printf", "console", "elf", "paging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["revindex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
