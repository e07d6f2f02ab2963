"""Git working-tree helpers."""

from __future__ import annotations

from pathlib import Path

GITIGNORE = ".gitignore"


def ignore(path: str, directory: str | Path | None = None) -> None:
    """Add path to .gitignore, creating the file if needed; no-op if already present."""
    gitignore = Path(directory or ".") / GITIGNORE
    if not gitignore.exists():
        gitignore.touch()
    content = gitignore.read_text(encoding="utf-8")
    if path in content:
        return
    gitignore.write_text(content + "\n" + path, encoding="utf-8")


def get_leaf_dir(root: str, path: str) -> str:
    """Return path relative to root (which ends in '/'), or "" when they are the same."""
    if root == path + "/":
        return ""
    return path.removeprefix(root)