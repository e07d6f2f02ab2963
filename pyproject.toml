[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bsf"
version = "0.1.0"
description = "Command-line helpers for Nix-based app dependency management: in-toto attestations, direnv setup, Dockerfiles and package ordering"
requires-python = ">=3.11"
keywords = ["nix", "dependencies", "oci", "dockerfile", "attestation", "in-toto", "direnv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bsf = "bsf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bsf"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
