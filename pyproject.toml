[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starkcommit"
version = "0.1.0"
description = "Merkle vector commitments, BLAKE2s hashing, query sampling and proof of work for STARK provers"
requires-python = ">=3.10"
dependencies = []
keywords = ["stark", "merkle", "blake2s", "commitment", "proof-of-work", "fri"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["starkcommit"]

[tool.pytest.ini_options]
addopts = "-ra"
