"""Package version records and their display ordering."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable

from bsf.precheck import compare_semver, is_valid_semver


@dataclass
class Package:
    """One published version of a package."""

    name: str = ""
    version: str = ""
    spdx_id: str = ""
    free: bool = False
    homepage: str = ""
    epoch_seconds: int = 0


def _newest_version_first(left: Package, right: Package) -> int:
    return compare_semver("v" + right.version, "v" + left.version)


def sort_packages_with_timestamp(packages: Iterable[Package] | None) -> list[Package] | None:
    """Order packages by publication time, newest first."""
    if packages is None:
        return None
    return sorted(packages, key=lambda pkg: pkg.epoch_seconds, reverse=True)


def sort_packages_with_version(packages: Iterable[Package] | None) -> list[Package] | None:
    """Order packages by semantic version, highest first."""
    if packages is None:
        return None
    return sorted(packages, key=cmp_to_key(_newest_version_first))


def sort_packages(packages: Iterable[Package] | None) -> list[Package]:
    """Semver packages by version first, then the rest by publication time."""
    semver_pkgs: list[Package] = []
    other_pkgs: list[Package] = []
    for pkg in packages or ():
        target = semver_pkgs if is_valid_semver("v" + pkg.version) else other_pkgs
        target.append(pkg)
    return sort_packages_with_version(semver_pkgs) + sort_packages_with_timestamp(other_pkgs)