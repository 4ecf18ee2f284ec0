[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "safeix"
version = "1.0.6"
description = "Decode system and stake program instructions into titled transaction summary items"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "transaction",
    "instruction",
    "parser",
    "stake",
    "nonce",
    "wallet",
    "summary",
]
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
packages = ["safeix"]

[tool.hatch.build.targets.sdist]
include = ["safeix", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
