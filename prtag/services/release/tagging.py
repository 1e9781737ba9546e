from __future__ import annotations

from dataclasses import dataclass

from prtag.core.result import Err, Ok, Result
from prtag.output.console import ConsoleProtocol, Style
from prtag.services.release.contracts import HistoryStore, git_error
from prtag.services.release.errors import ReleaseError
from prtag.services.release.semver import SemVer


@dataclass(frozen=True, slots=True)
class TagCreated:
    tag: str
    commit: str


@dataclass(frozen=True, slots=True)
class TagExists:
    tag: str


type TagPublishResult = TagCreated | TagExists


def publish_tag(
    *,
    history: HistoryStore,
    version: SemVer,
    commit: str,
    remote: str,
    console: ConsoleProtocol,
) -> Result[TagPublishResult, ReleaseError]:
    """Create and push the version tag unless it already exists.

    The existence check is local and advisory. Under concurrent runs the
    remote rejecting a duplicate push is what keeps one tag per version.
    A tag whose push fails is deleted again locally.
    """
    tag = version.to_tag()

    exists = history.tag_exists(tag)
    if isinstance(exists, Err):
        return Err(git_error(exists.error, message=f"failed to check tag {tag}"))
    if exists.value:
        console.warning(f"tag {tag} already exists; skipping")
        return Ok(TagExists(tag=tag))

    console.print(f"git tag {tag} {commit[:8]}", Style.DIM)
    created = history.create_tag(tag, commit)
    if isinstance(created, Err):
        return Err(git_error(created.error, message=f"failed to create tag {tag}"))

    console.print(f"git push {remote} {tag}", Style.DIM)
    pushed = history.push_tag(remote, tag)
    if isinstance(pushed, Err):
        # A failed push leaves no local tag behind.
        dropped = history.delete_tag(tag)
        if isinstance(dropped, Err):
            console.warning(f"local tag {tag} could not be removed: {dropped.error.message}")
        return Err(
            ReleaseError(
                kind="tag_push_failed",
                message=f"failed to push tag {tag} to {remote}",
                hint=pushed.error.message,
            )
        )

    console.success(f"created and pushed tag {tag}")
    return Ok(TagCreated(tag=tag, commit=commit))
