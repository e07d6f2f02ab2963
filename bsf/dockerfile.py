"""Dockerfile generation and base-image tag rewriting."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import IO, Iterable, TextIO

PLATFORM_ARCHES = {
    "linux/amd64": "x86_64-linux",
    "linux/arm64": "aarch64-linux",
}

DEV_IMAGE_TAG = "bsfimage:dev"
RUNTIME_IMAGE_TAG = "bsfimage:runtime"

_NIX_BUILD = (
    "RUN nix \\\n"
    '    --extra-experimental-features "nix-command flakes" \\\n'
    "    --option filter-syscalls false \\\n"
    "    "
)

_HEAD = (
    "# Nix builder\n"
    "FROM nixos/nix:latest AS builder\n"
    "\n"
    "# Copy our source and setup our working dir.\n"
    "COPY . /tmp/build\n"
    "WORKDIR /tmp/build/bsf\n"
    "\n"
    "# Build runtime package dependencies\n"
    + _NIX_BUILD
    + "build\n"
    "\n"
    "# Build additional packages we need for runtime\n"
    + _NIX_BUILD
    + "build .#runtimeEnvs."
)

_CLOSURE = (
    "\n\n"
    "# Copy the Nix store closure into a directory. The Nix store closure is the\n"
    "# entire set of Nix store values that we need for our build and custom environment.\n"
    "RUN mkdir /tmp/nix-store-closure\n"
    "RUN cp -R $(nix-store -qR result/) /tmp/nix-store-closure\n"
    "RUN cp -R $(nix-store -qR runtimeEnv/) /tmp/nix-store-closure\n"
)

_FINAL_COMMENT = (
    "\n\n"
    "# # Final image is based on scratch. We copy a bunch of Nix dependencies\n"
    "# # but they're fully self-contained so we don't need Nix anymore.\n"
)

_COPY_STORE = (
    "\n# Copy /nix/store\n"
    "COPY --from=builder /tmp/nix-store-closure /nix/store\n"
    "# Add symlink to result\n"
    "COPY --from=builder /tmp/build/bsf/result/bin /bin\n"
    "COPY --from=builder /tmp/build/bsf/runtimeEnv /bin\n"
)

_ENV_DEFAULTS = (
    '\nENV SSL_CERT_FILE="/bin/etc/ssl/certs/ca-bundle.crt"\n'
    'ENV PATH="/bin:${PATH}"\n'
)


class DockerfileError(ValueError):
    """Raised when a Dockerfile cannot be edited or inspected."""


@dataclass
class DockerfileConfig:
    """Values substituted into the generated Dockerfile."""

    platform: str = ""
    cmd: list[str] = field(default_factory=list)
    entrypoint: list[str] = field(default_factory=list)
    env_vars: dict[str, str] = field(default_factory=dict)
    config: str = ""
    dev_deps: bool = False


def _quote(value: str) -> str:
    return value.replace("\n", "\\n")


def convert_envs_to_map(envs: Iterable[str] | None) -> dict[str, str]:
    """Turn KEY=value strings into a mapping, skipping entries without '='."""
    result: dict[str, str] = {}
    for env in envs or ():
        key, sep, value = env.partition("=")
        if sep:
            result[key] = value
    return result


def to_dockerfile_config(
    cmd: Iterable[str] | None,
    entrypoint: Iterable[str] | None,
    env_vars: Iterable[str] | None,
    platform: str,
) -> DockerfileConfig:
    """Build the template values for an artifact on a platform."""
    return DockerfileConfig(
        platform=PLATFORM_ARCHES.get(platform, platform),
        cmd=list(cmd or ()),
        entrypoint=list(entrypoint or ()),
        env_vars=convert_envs_to_map(env_vars),
    )


def _render(cfg: DockerfileConfig) -> str:
    dev = cfg.dev_deps
    parts = [_HEAD, cfg.platform, ".runtime -o runtimeEnv\n\n"]
    if dev:
        parts.append(
            "\n# Build development packages if devDeps is set to true in bsf.hcl\n"
            + _NIX_BUILD
            + f"build .#devEnvs.{cfg.platform}.development -o devEnv\n"
        )
    parts.append(_CLOSURE)
    if dev:
        parts.append("\nRUN cp -R $(nix-store -qR devEnv/) /tmp/nix-store-closure\n")
    parts.append(_FINAL_COMMENT)
    parts.append("\nFROM busybox\n" if dev else "\nFROM scratch\n")
    parts.append("\n\nWORKDIR /bin\n")
    if cfg.config:
        parts.append(f"\nCOPY {cfg.config} /result/app\n")
    parts.append(_COPY_STORE)
    if dev:
        parts.append("\nCOPY --from=builder /tmp/build/bsf/devEnv /bin\n")
    parts.append(_ENV_DEFAULTS)

    if cfg.env_vars:
        parts.append("ENV ")
        parts.extend(f"{key}={_quote(cfg.env_vars[key])} " for key in sorted(cfg.env_vars))
    parts.append("\n")

    if cfg.cmd:
        parts.append("CMD [")
        for index, element in enumerate(cfg.cmd):
            parts.append(" " + (", " if index else "") + f' "{_quote(element)}" ')
        parts.append("]")
    parts.append("\n")

    if cfg.entrypoint:
        parts.append(" ENTRYPOINT [")
        for index, element in enumerate(cfg.entrypoint):
            parts.append((", " if index else "") + f' "{_quote(element)}" ')
        parts.append("]")
    parts.append("\n")
    return "".join(parts)


def generate_dockerfile(
    writer: TextIO,
    cmd: Iterable[str] | None,
    entrypoint: Iterable[str] | None,
    env_vars: Iterable[str] | None,
    platform: str,
) -> None:
    """Write a Dockerfile that builds the artifact with Nix to writer."""
    writer.write(_render(to_dockerfile_config(cmd, entrypoint, env_vars, platform)))


def read_dockerfile(stream: IO) -> list[str]:
    """Read all lines of a Dockerfile without line terminators."""
    data = stream.read()
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def edit_dockerfile(lines: list[str], dev: bool, tag: str) -> list[str]:
    """Retag the first FROM line marked as the dev or runtime base image."""
    search_tag = DEV_IMAGE_TAG if dev else RUNTIME_IMAGE_TAG
    index = next((i for i, line in enumerate(lines) if search_tag in line), None)
    if index is None or not lines[index]:
        raise DockerfileError(f"no FROM command found with tag {search_tag}")

    from_parts = lines[index].split()
    if len(from_parts) < 2:
        raise DockerfileError("invalid FROM command format")

    image = from_parts[1].split(":")[0]
    new_from = " ".join([f"FROM {image}:{tag}", *from_parts[2:]])
    result = list(lines)
    result[index] = new_from
    return result


def modify_dockerfile(stream: IO, dev: bool, tag: str) -> list[str]:
    """Read a Dockerfile and return its lines with the base image retagged."""
    return edit_dockerfile(read_dockerfile(stream), dev, tag)


def get_snapshotter() -> str:
    """Return the docker daemon's storage driver status."""
    try:
        completed = subprocess.run(
            ["docker", "info", "-f", " '{{ .DriverStatus }}' "],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise DockerfileError(f"error fetching  DriverStatus: {exc}") from exc
    return completed.stdout.decode("utf-8", errors="replace")