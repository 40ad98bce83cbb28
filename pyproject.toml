[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chesscore"
version = "0.1.0"
description = "Chess engine building blocks: bitboards, magic sliding attacks, a xorshift PRNG, debug statistics and benchmark command lists."
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "bitboard", "magic bitboards", "uci", "benchmark", "engine"]
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
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chesscore"]

[tool.hatch.build.targets.sdist]
include = ["chesscore", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
