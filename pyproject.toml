[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chessforge"
version = "0.1.0"
description = "A small chess engine: board backends, rules, move generation, material evaluation and alpha-beta search."
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "engine", "bitboard", "minimax", "alpha-beta", "move-generation"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chessforge = "chessforge.cli:main"
chessforge-benchmark = "chessforge.cli:benchmark"

[tool.hatch.build.targets.wheel]
packages = ["chessforge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
