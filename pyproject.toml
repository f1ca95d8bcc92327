[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosa"
version = "0.1.0"
description = "Auction state machine: auctions, bids, approval, closing and expiry driven by block time"
requires-python = ">=3.10"
dependencies = []
keywords = ["auction", "bidding", "state machine", "keeper", "genesis", "bech32"]
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
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cosa"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
