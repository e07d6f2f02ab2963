"""Generation of the Cargo.nix file for Rust projects."""

from __future__ import annotations

import subprocess
from pathlib import Path

CARGO2NIX_COMMAND = ("nix", "run", "github:cargo2nix/cargo2nix")


def gen_cargo_nix(directory: str | Path = "bsf/") -> None:
    """Run cargo2nix in directory; raise CalledProcessError if it fails."""
    subprocess.run(
        list(CARGO2NIX_COMMAND),
        cwd=directory,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=True,
    )