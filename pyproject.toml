[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "suiarb"
version = "0.1.0"
description = "Arbitrage bot building blocks for Sui: opportunity cache, dispatch, dry-run checks, command-line options and a websocket transaction relay."
requires-python = ">=3.10"
keywords = ["sui", "arbitrage", "mev", "dex", "relay", "websocket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
suiarb-relay = "suiarb.relay:main"

[tool.hatch.build.targets.wheel]
packages = ["suiarb"]

[tool.hatch.build.targets.sdist]
include = ["suiarb", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 120
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
