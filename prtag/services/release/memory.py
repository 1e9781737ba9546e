"""In-memory collaborators for the release pipeline.

These implement HistoryStore, PullRequestSource and ReleaseStore without
git or network access, the same way MockConsole stands in for Rich.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from prtag.core.result import Err, Ok, Result
from prtag.git.repository import GitError
from prtag.services.release.errors import ReleaseError
from prtag.services.release.model import PublishedRelease, PullRequestRef

HEAD_SHA = "f" * 40
ROOT_SHA = "0" * 40


def _root_commits() -> list[str]:
    return [ROOT_SHA]


@dataclass
class MemoryHistory:
    """History store holding a fixed first-parent commit list and a tag table.

    `commits` is returned for any range; `ranges` records what was asked.
    """

    head: str = HEAD_SHA
    nearest_tag: str | None = None
    roots: list[str] = field(default_factory=_root_commits)
    commits: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    pushed: list[tuple[str, str]] = field(default_factory=list)
    ranges: list[tuple[str, str]] = field(default_factory=list)
    push_error: str | None = None
    describe_error: str | None = None

    def head_sha(self) -> Result[str, GitError]:
        return Ok(self.head)

    def describe_latest_tag(self, rev: str = "HEAD") -> Result[str | None, GitError]:
        if self.describe_error is not None:
            return Err(GitError(command="describe --tags", message=self.describe_error))
        return Ok(self.nearest_tag)

    def root_commits(self, rev: str = "HEAD") -> Result[list[str], GitError]:
        return Ok(list(self.roots))

    def first_parent_commits(self, start: str, end: str) -> Result[list[str], GitError]:
        self.ranges.append((start, end))
        return Ok(list(self.commits))

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        return Ok(name in self.tags)

    def create_tag(self, name: str, commit: str) -> Result[None, GitError]:
        if name in self.tags:
            return Err(GitError(command=f"tag {name}", message=f"tag '{name}' already exists"))
        self.tags[name] = commit
        return Ok(None)

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]:
        if self.push_error is not None:
            return Err(GitError(command=f"push {remote} {name}", message=self.push_error))
        self.pushed.append((remote, name))
        return Ok(None)

    def delete_tag(self, name: str) -> Result[None, GitError]:
        if self.tags.pop(name, None) is None:
            return Err(GitError(command=f"tag -d {name}", message=f"tag '{name}' not found."))
        return Ok(None)


@dataclass
class MemoryPullRequests:
    """Pull-request source keyed by merge commit and by number."""

    by_commit: dict[str, PullRequestRef] = field(default_factory=dict)
    by_number: dict[int, PullRequestRef] = field(default_factory=dict)
    lookups: list[str] = field(default_factory=list)
    fetched: list[int] = field(default_factory=list)

    def add(self, pr: PullRequestRef, *commits: str) -> None:
        self.by_number[pr.number] = pr
        for sha in commits:
            self.by_commit[sha] = pr

    def find_merged_pr_for_commit(self, sha: str) -> Result[PullRequestRef | None, ReleaseError]:
        self.lookups.append(sha)
        return Ok(self.by_commit.get(sha))

    def get_pull_request(self, number: int) -> Result[PullRequestRef, ReleaseError]:
        self.fetched.append(number)
        pr = self.by_number.get(number)
        if pr is None:
            return Err(
                ReleaseError(kind="gh_failed", message=f"failed to fetch pull request #{number}")
            )
        return Ok(pr)


@dataclass
class MemoryReleases:
    """Release store recording (tag, title, body) per created release."""

    created: list[tuple[str, str, str]] = field(default_factory=list)
    error: str | None = None

    def create_release(
        self, *, tag: str, title: str, body: str
    ) -> Result[PublishedRelease, ReleaseError]:
        if self.error is not None:
            return Err(ReleaseError(kind="release_failed", message=self.error))
        self.created.append((tag, title, body))
        return Ok(PublishedRelease(tag=tag, title=title, url=None))
