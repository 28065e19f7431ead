[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xquant"
version = "0.1.0"
description = "Trading building blocks: order execution strategies, signals, order management and market data streams"
requires-python = ">=3.10"
dependencies = [
    "websockets",
]
keywords = ["trading", "vwap", "twap", "iceberg", "trailing-stop", "market-data", "orders"]
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

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["xquant"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
