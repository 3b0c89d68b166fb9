[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigmacomp"
version = "0.2.0"
description = "Building blocks for compiling sigma-protocol statements: typed arithmetic expressions over Scalars and Points, tagged variable declarations, and runtime range and vector helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["sigma protocol", "zero knowledge", "range proof", "arithmetic expressions", "code generation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sigmacomp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
