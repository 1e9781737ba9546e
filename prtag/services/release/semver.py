from __future__ import annotations

import re
from dataclasses import dataclass

from prtag.services.release.bump import BumpCategory


_VERSION_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise ValueError(f"version components must be non-negative: {self!r}")

    def to_tag(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.to_tag()

    def bump(self, category: BumpCategory) -> SemVer:
        match category:
            case BumpCategory.MAJOR:
                return SemVer(self.major + 1, 0, 0)
            case BumpCategory.MINOR:
                return SemVer(self.major, self.minor + 1, 0)
            case BumpCategory.PATCH:
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump category: {category}")


ZERO = SemVer(0, 0, 0)


def parse_version_tag(tag: str) -> SemVer | None:
    """Parse `X.Y.Z` (a leading `v` is tolerated for existing history)."""
    m = _VERSION_RE.match(tag.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def next_version(baseline: SemVer | None, category: BumpCategory) -> SemVer:
    """Apply a bump; no baseline counts as 0.0.0 (first minor release is 0.1.0)."""
    return (baseline or ZERO).bump(category)
