"""Set up direnv for a project: .envrc, .gitignore and exported variables."""

from __future__ import annotations

import os
import re
from pathlib import Path

USE_FLAKE_LINE = "use flake bsf/."
ENVRC = ".envrc"
GITIGNORE = ".gitignore"

_KEY_VALUE = re.compile(r"[0-9A-Za-z_]+=[^\t\n\f\r ]+")


def _append_or_create(path: Path, needle: str) -> None:
    if path.exists():
        content = path.read_text(encoding="utf-8")
        if needle not in content:
            with path.open("a", encoding="utf-8") as handle:
                handle.write("\n" + needle)
    else:
        path.write_text(needle, encoding="utf-8")


def generate_envrc(directory: str | Path | None = None) -> None:
    """Ensure .envrc exists and loads the project flake."""
    _append_or_create(Path(directory or ".") / ENVRC, USE_FLAKE_LINE)


def fetch_gitignore(directory: str | Path | None = None) -> None:
    """Ensure .gitignore exists and ignores .envrc."""
    _append_or_create(Path(directory or ".") / GITIGNORE, ENVRC)


def set_direnv(args: str, directory: str | Path | None = None) -> None:
    """Validate comma-separated KEY=value pairs and export them from an existing .envrc."""
    validate_env_vars(args)
    path = Path(directory or ".") / ENVRC
    fd = os.open(path, os.O_APPEND | os.O_WRONLY)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write("\nexport " + args)


def validate_env_vars(args: str) -> None:
    """Raise ValueError unless args is a comma-separated list of KEY=value pairs."""
    for pair in args.split(","):
        if not _KEY_VALUE.fullmatch(pair):
            raise ValueError("Invalid key-value pair format")
        key, value = pair.split("=", 1)
        if any(ch in key for ch in "= \t\n"):
            raise ValueError("Invalid characters in key")
        if "\x00" in value:
            raise ValueError("Invalid characters in value")