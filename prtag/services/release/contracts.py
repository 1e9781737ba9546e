"""Collaborator interfaces for the release pipeline.

`prtag.git.Repository` satisfies HistoryStore and `gh.GhClient` satisfies
PullRequestSource and ReleaseStore; tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from prtag.core.result import Result
from prtag.git.repository import GitError
from prtag.services.release.errors import ReleaseError
from prtag.services.release.model import PublishedRelease, PullRequestRef


class HistoryStore(Protocol):
    def head_sha(self) -> Result[str, GitError]: ...

    def describe_latest_tag(self, rev: str = "HEAD") -> Result[str | None, GitError]: ...

    def root_commits(self, rev: str = "HEAD") -> Result[list[str], GitError]: ...

    def first_parent_commits(self, start: str, end: str) -> Result[list[str], GitError]: ...

    def tag_exists(self, name: str) -> Result[bool, GitError]: ...

    def create_tag(self, name: str, commit: str) -> Result[None, GitError]: ...

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]: ...

    def delete_tag(self, name: str) -> Result[None, GitError]: ...


class PullRequestSource(Protocol):
    def find_merged_pr_for_commit(self, sha: str) -> Result[PullRequestRef | None, ReleaseError]:
        """Merged pull request whose merge produced `sha`, if any."""
        ...

    def get_pull_request(self, number: int) -> Result[PullRequestRef, ReleaseError]: ...


class ReleaseStore(Protocol):
    def create_release(
        self, *, tag: str, title: str, body: str
    ) -> Result[PublishedRelease, ReleaseError]: ...


def git_error(error: GitError, *, message: str) -> ReleaseError:
    """Wrap a history-store failure as a release error."""
    return ReleaseError(
        kind="git_failed",
        message=message,
        hint=f"git {error.command}: {error.message}",
    )
