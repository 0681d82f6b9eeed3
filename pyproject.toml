[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alliancekit"
version = "0.1.0"
description = "Alliance staking primitives: fixed-point decimals, coins, store keys, proposals, messages and reward accounting"
requires-python = ">=3.10"
dependencies = []
keywords = ["staking", "alliance", "rewards", "delegation", "fixed-point", "store-keys"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["alliancekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
