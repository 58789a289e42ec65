[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ztdlib"
version = "0.1.2"
description = "Goldilocks field arithmetic, Tip5 hashing, nouns with jam/cue, hash-ordered sets and maps, and Cheetah curve points"
requires-python = ">=3.10"
dependencies = []
keywords = ["noun", "jam", "cue", "tip5", "goldilocks", "cheetah", "zero-knowledge", "treap"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ztdlib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
