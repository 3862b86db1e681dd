[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtrvsearch"
version = "0.1.0"
description = "Text search building blocks: tokenizer, boolean query parser, snippet extraction and relevance rankers"
requires-python = ">=3.10"
dependencies = []
keywords = ["search", "tokenizer", "bm25", "tf-idf", "query-parser", "snippets", "ranking"]
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
    "Topic :: Text Processing :: Indexing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rtrvsearch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
