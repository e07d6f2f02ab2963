"""Read the docker client's current context and context endpoints."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _load(data: bytes) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _lookup(document: Any, path: str) -> str:
    value = document
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return ""
        value = value[key]
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, separators=(",", ":"))


def _home(home: str | Path | None) -> Path:
    return Path(home) if home is not None else Path.home()


def get_current_context(home: str | Path | None = None) -> str:
    """Return currentContext from ~/.docker/config.json, or "" when unset."""
    path = _home(home) / ".docker" / "config.json"
    return _lookup(_load(path.read_bytes()), "currentContext")


def read_context_endpoints(home: str | Path | None = None) -> dict[str, str]:
    """Map each docker context name to its docker host endpoint."""
    meta_dir = _home(home) / ".docker" / "contexts" / "meta"
    endpoints: dict[str, str] = {}
    for entry in sorted(meta_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue
        document = _load((entry / "meta.json").read_bytes())
        endpoints[_lookup(document, "Name")] = _lookup(document, "Endpoints.docker.Host")
    return endpoints