[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "irishub"
version = "0.1.0"
description = "Guardian and mint chain modules: super accounts, per-block inflation minting, genesis handling and an in-memory state store"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "guardian", "mint", "inflation", "genesis", "bech32"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["irishub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
