from __future__ import annotations

from dataclasses import dataclass

from prtag.core.result import Err, Ok, Result
from prtag.services.release.contracts import HistoryStore, git_error
from prtag.services.release.errors import ReleaseError
from prtag.services.release.semver import ZERO, SemVer, parse_version_tag


@dataclass(frozen=True, slots=True)
class LatestTag:
    name: str  # as found in history, usable as a revision
    version: SemVer


def read_latest_tag(
    history: HistoryStore, *, rev: str = "HEAD"
) -> Result[LatestTag | None, ReleaseError]:
    """Closest release tag reachable from `rev`, or None before the first release."""
    described = history.describe_latest_tag(rev)
    if isinstance(described, Err):
        return Err(git_error(described.error, message="failed to read latest tag"))

    name = described.value
    if name is None:
        return Ok(None)

    version = parse_version_tag(name)
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_tag",
                message=f"latest tag is not a version: {name}",
                hint="Expected MAJOR.MINOR.PATCH; tag the last release correctly first.",
            )
        )
    return Ok(LatestTag(name=name, version=version))


def baseline_version(latest: LatestTag | None) -> SemVer:
    return latest.version if latest is not None else ZERO
