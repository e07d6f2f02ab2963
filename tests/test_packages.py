import pytest

from bsf.packages import (
    Package,
    sort_packages,
    sort_packages_with_timestamp,
    sort_packages_with_version,
)


def _pkg(name, version, epoch):
    return Package(
        name=name,
        version=version,
        spdx_id="MIT",
        free=True,
        homepage="https://test.com",
        epoch_seconds=epoch,
    )


SEMVER_ONLY = (
    [
        _pkg("semver", "1.0.0", 1),
        _pkg("semver", "2.0.0", 2),
        _pkg("semver", "1.5.6", 2),
        _pkg("semver", "0.3.0", 2),
        _pkg("semver", "11.6.0", 2),
        _pkg("semver", "2.11.6", 2),
        _pkg("semver", "2.6.9", 2),
    ],
    ["11.6.0", "2.11.6", "2.6.9", "2.0.0", "1.5.6", "1.0.0", "0.3.0"],
)

MIXED = (
    [
        _pkg("non-semver", "234ca.b243.cc32c", 1),
        _pkg("non-semver", "3213.122a2.1212", 2),
        _pkg("semver", "1.5.22", 1),
        _pkg("semver", "2.6.11", 1),
        _pkg("non-semver", "213f.4353.75v4", 5),
        _pkg("non-semver", "313f.4353.75v4", 4),
        _pkg("semver", "4.74.0", 1),
    ],
    [
        "4.74.0",
        "2.6.11",
        "1.5.22",
        "213f.4353.75v4",
        "313f.4353.75v4",
        "3213.122a2.1212",
        "234ca.b243.cc32c",
    ],
)

TIMESTAMP_ONLY = (
    [
        _pkg("non-semver", "32fd.12a12.1212", 10),
        _pkg("non-semver", "4fd2.1212.1212", 4),
        _pkg("non-semver", "5fd2.1212.1212", 2),
        _pkg("non-semver", "232e.5v33.743", 7),
        _pkg("non-semver", "23r.2324.0", 6),
        _pkg("non-semver", "6343.4r32.1212", 3),
        _pkg("non-semver", "21d2.1212.1212", 12),
    ],
    [
        "21d2.1212.1212",
        "32fd.12a12.1212",
        "232e.5v33.743",
        "23r.2324.0",
        "4fd2.1212.1212",
        "6343.4r32.1212",
        "5fd2.1212.1212",
    ],
)


@pytest.mark.parametrize(
    "pkgs, want",
    [SEMVER_ONLY, MIXED, TIMESTAMP_ONLY],
    ids=["semver", "semver-and-non-semver", "timestamp"],
)
def test_sort_packages(pkgs, want):
    got = sort_packages(pkgs)
    assert [pkg.version for pkg in got] == want


def test_sort_packages_keeps_all_records_unchanged():
    pkgs, _ = MIXED
    got = sort_packages(pkgs)
    assert sorted(got, key=lambda p: p.version) == sorted(pkgs, key=lambda p: p.version)


def test_sort_packages_with_timestamp_orders_descending():
    pkgs, _ = TIMESTAMP_ONLY
    got = sort_packages_with_timestamp(pkgs)
    epochs = [pkg.epoch_seconds for pkg in got]
    assert epochs == sorted(epochs, reverse=True)


def test_sort_packages_with_version_orders_descending():
    pkgs, want = SEMVER_ONLY
    assert [pkg.version for pkg in sort_packages_with_version(pkgs)] == want


def test_none_inputs():
    assert sort_packages_with_timestamp(None) is None
    assert sort_packages_with_version(None) is None
    assert sort_packages(None) == []