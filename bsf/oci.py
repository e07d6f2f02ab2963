"""Helpers for building OCI images of project artifacts."""

from __future__ import annotations

from pathlib import Path

from bsf.dockerfile import PLATFORM_ARCHES, modify_dockerfile

SUPPORTED_PLATFORMS = ("linux/amd64", "linux/arm64")


def get_new_name(name: str, tag: str) -> str:
    """Replace the tag of an image name, or add one if it has none."""
    return f"{name.split(':')[0]}:{tag}"


def gen_oci_attr_name(env: str, platform: str, dev_deps: bool) -> str:
    """Return the flake attribute that builds the image for an artifact."""
    arch = PLATFORM_ARCHES.get(platform, "unknown")
    base = f"bsf/.#ociImages.{arch}.ociImage_{env}_"
    if env == "pkgs":
        return base + ("dev-as-dir" if dev_deps else "runtime-as-dir")
    return base + ("app_with_dev-as-dir" if dev_deps else "app-as-dir")


def modify_dockerfile_with_tag(path: str | Path, tag: str, dev_deps: bool) -> None:
    """Retag the bsf base image in the Dockerfile under path (or the current directory)."""
    dockerfile = Path(f"{path}/Dockerfile") if path else Path("./Dockerfile")
    with dockerfile.open("rb") as handle:
        lines = modify_dockerfile(handle, dev_deps, tag)
    dockerfile.write_text("\n".join(lines), encoding="utf-8")