from __future__ import annotations

from dataclasses import dataclass

from prtag.core.config import DEFAULT_CHANGELOG_EMPTY, DEFAULT_CHANGELOG_HEADING
from prtag.services.release.model import ChangeSet, PullRequestRef
from prtag.services.release.semver import SemVer


@dataclass(frozen=True, slots=True)
class Changelog:
    lines: tuple[str, ...]

    def as_markdown(self) -> str:
        return "\n".join(self.lines)


def render_line(pr: PullRequestRef) -> str:
    return f"- {pr.title} ([#{pr.number}]({pr.url})) by @{pr.author}"


def render_changelog(
    change_set: ChangeSet, *, empty_message: str = DEFAULT_CHANGELOG_EMPTY
) -> Changelog:
    """One line per pull request in change set order; a placeholder line when empty."""
    if change_set.is_empty:
        return Changelog(lines=(empty_message,))
    return Changelog(lines=tuple(render_line(pr) for pr in change_set))


def render_release_body(changelog: Changelog, *, heading: str = DEFAULT_CHANGELOG_HEADING) -> str:
    return f"{heading}\n\n{changelog.as_markdown()}"


def release_title(version: SemVer) -> str:
    return f"Release {version.to_tag()}"
