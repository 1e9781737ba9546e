from __future__ import annotations

import pytest

from prtag.services.release.bump import BumpCategory
from prtag.services.release.semver import SemVer, next_version, parse_version_tag


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("1.2.3", SemVer(1, 2, 3)),
        ("0.0.0", SemVer(0, 0, 0)),
        ("v2.0.10", SemVer(2, 0, 10)),
        (" 10.20.30\n", SemVer(10, 20, 30)),
    ],
)
def test_parse_version_tag_accepts(tag: str, expected: SemVer) -> None:
    assert parse_version_tag(tag) == expected


@pytest.mark.parametrize("tag", ["", "1.2", "1.2.3.4", "01.2.3", "1.2.3-rc.1", "latest", "V1.2.3"])
def test_parse_version_tag_rejects(tag: str) -> None:
    assert parse_version_tag(tag) is None


def test_bump_resets_lower_components() -> None:
    base = SemVer(1, 2, 3)
    assert base.bump(BumpCategory.MAJOR) == SemVer(2, 0, 0)
    assert base.bump(BumpCategory.MINOR) == SemVer(1, 3, 0)
    assert base.bump(BumpCategory.PATCH) == SemVer(1, 2, 4)


def test_next_version_without_baseline_starts_from_zero() -> None:
    assert next_version(None, BumpCategory.MAJOR) == SemVer(1, 0, 0)
    assert next_version(None, BumpCategory.MINOR) == SemVer(0, 1, 0)
    assert next_version(None, BumpCategory.PATCH) == SemVer(0, 0, 1)


def test_next_version_is_always_greater() -> None:
    base = SemVer(3, 9, 9)
    for category in BumpCategory:
        assert next_version(base, category) > base


def test_tag_format_has_no_prefix() -> None:
    assert SemVer(1, 3, 0).to_tag() == "1.3.0"
    assert str(SemVer(1, 3, 0)) == "1.3.0"


def test_negative_component_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        SemVer(1, -1, 0)


def test_repeated_bumps_strictly_increase() -> None:
    base = SemVer(0, 4, 2)
    for category in BumpCategory:
        once = next_version(base, category)
        assert next_version(once, category) > once > base
