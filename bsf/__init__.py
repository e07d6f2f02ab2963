"""Tools for Nix-managed app dependencies: attestations, direnv, Dockerfiles and versions."""

__version__ = "0.1.0"