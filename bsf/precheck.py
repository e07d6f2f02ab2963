"""Semantic version checks for required tool versions."""

from __future__ import annotations

import re

NIX_VERSION = "v2.18.1"

_NUM = r"0|[1-9][0-9]*"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"
_SEMVER = re.compile(
    rf"v({_NUM})"
    rf"(?:\.({_NUM})"
    rf"(?:\.({_NUM})"
    rf"(?:-({_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
    rf"(?:\+{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*)?"
    r")?)?"
)
_DIGITS = re.compile(r"[0-9]+")


def _parse(version: str) -> tuple[int, int, int, str] | None:
    match = _SEMVER.fullmatch(version)
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    return int(major), int(minor or 0), int(patch or 0), prerelease or ""


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


def _compare_prerelease(left: str, right: str) -> int:
    if left == right:
        return 0
    if not left:
        return 1
    if not right:
        return -1
    left_ids = left.split(".")
    right_ids = right.split(".")
    for x, y in zip(left_ids, right_ids):
        if x == y:
            continue
        x_num = _DIGITS.fullmatch(x) is not None
        y_num = _DIGITS.fullmatch(y) is not None
        if x_num and y_num:
            return _cmp(int(x), int(y))
        if x_num:
            return -1
        if y_num:
            return 1
        return _cmp(x, y)
    return _cmp(len(left_ids), len(right_ids))


def is_valid_semver(version: str) -> bool:
    """Report whether version is a valid 'v'-prefixed semantic version."""
    return _parse(version) is not None


def compare_semver(left: str, right: str) -> int:
    """Compare two versions, returning -1, 0 or 1.

    Invalid versions sort before valid ones and equal to each other.
    """
    a = _parse(left)
    b = _parse(right)
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    numbers = _cmp(a[:3], b[:3])
    if numbers:
        return numbers
    return _compare_prerelease(a[3], b[3])


def check_version_greater(current_ver: str, required_ver: str) -> bool:
    """Report whether current_ver is at least required_ver."""
    return compare_semver(current_ver, required_ver) >= 0