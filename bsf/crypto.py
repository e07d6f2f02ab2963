"""Hashing and encoding helpers."""

from __future__ import annotations

import base64
import binascii
import hashlib
from pathlib import Path

_CHUNK_SIZE = 64 * 1024


def file_sha256(file_path: str | Path) -> str:
    """Return the hex-encoded SHA-256 digest of a file's contents."""
    digest = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def hex_to_base64(hex_str: str) -> str:
    """Convert a hex string to standard base64; raise ValueError on bad hex."""
    try:
        raw = binascii.unhexlify(hex_str)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {hex_str!r}") from exc
    return base64.b64encode(raw).decode("ascii")