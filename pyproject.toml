[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wordindex"
version = "0.1.0"
description = "Word counting, random text generation and inverted indexes over plain-text files"
requires-python = ">=3.10"
dependencies = []
keywords = ["word count", "inverted index", "text", "indexing", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wordcount = "wordindex.wordcount:main"
wordindex-filegen = "wordindex.filegen:main"
wordindex-simple = "wordindex.simple_index:main"
wordindex-positional = "wordindex.positional_index:main"

[tool.hatch.build.targets.wheel]
packages = ["wordindex"]

[tool.pytest.ini_options]
addopts = "-ra"
