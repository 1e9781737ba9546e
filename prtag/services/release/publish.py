from __future__ import annotations

from prtag.core.result import Err, Ok, Result
from prtag.output.console import ConsoleProtocol
from prtag.services.release.contracts import ReleaseStore
from prtag.services.release.errors import ReleaseError
from prtag.services.release.model import PublishedRelease
from prtag.services.release.notes import Changelog, release_title, render_release_body
from prtag.services.release.semver import SemVer


def publish_release(
    *,
    releases: ReleaseStore,
    version: SemVer,
    changelog: Changelog,
    heading: str,
    console: ConsoleProtocol,
) -> Result[PublishedRelease, ReleaseError]:
    """Create the release record for an already pushed tag.

    Runs at most once per version: the pipeline only reaches it after the
    tag step reported a newly created tag.
    """
    tag = version.to_tag()
    published = releases.create_release(
        tag=tag,
        title=release_title(version),
        body=render_release_body(changelog, heading=heading),
    )
    if isinstance(published, Err):
        return published

    where = f": {published.value.url}" if published.value.url else ""
    console.success(f"published release {tag}{where}")
    return Ok(published.value)
