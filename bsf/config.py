"""Global configuration stored in the user's home directory."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = ".bsf.json"
DEFAULT_API = "api.buildsafe.dev:443"
DEFAULT_API_TLS = True


@dataclass
class Config:
    """Settings for reaching the package search API."""

    build_safe_api: str = ""
    build_safe_api_tls: bool = False

    def to_json(self) -> str:
        """Serialise as indented JSON."""
        return json.dumps(
            {
                "buildsafe_api": self.build_safe_api,
                "buildsafe_api_tls": self.build_safe_api_tls,
            },
            indent=2,
        )


def parse_config(data: str | bytes) -> Config:
    """Parse a JSON document into a Config; raise ValueError if it is malformed."""
    obj = json.loads(data)
    config = Config()
    if obj is None:
        return config
    if not isinstance(obj, dict):
        raise ValueError("configuration must be a JSON object")

    fields = {key.lower(): value for key, value in obj.items()}
    api = fields.get("buildsafe_api")
    if api is not None:
        if not isinstance(api, str):
            raise ValueError("buildsafe_api must be a string")
        config.build_safe_api = api
    tls = fields.get("buildsafe_api_tls")
    if tls is not None:
        if not isinstance(tls, bool):
            raise ValueError("buildsafe_api_tls must be a boolean")
        config.build_safe_api_tls = tls
    return config


def pre_check_conf(home: str | Path | None = None) -> Config:
    """Load ~/.bsf.json, creating it with defaults when it does not exist."""
    home_dir = Path(home) if home is not None else Path.home()
    path = home_dir / CONFIG_FILE_NAME
    if not path.exists():
        config = Config(build_safe_api=DEFAULT_API, build_safe_api_tls=DEFAULT_API_TLS)
        path.write_text(config.to_json(), encoding="utf-8")
        return config
    return parse_config(path.read_bytes())