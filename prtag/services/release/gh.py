"""GitHub access through the `gh` CLI.

Reads (pull request search and lookup) are retried on transient failures;
`gh release create` runs exactly once.
"""

from __future__ import annotations

import json
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from time import sleep

from prtag.core.result import Err, Ok, Result
from prtag.core.structured import as_obj_list, as_str_dict, get_int, get_str
from prtag.platform.process import NO_EXIT_STATUS, ProcessError
from prtag.platform.process import run as run_process
from prtag.services.release.errors import ReleaseError, ReleaseErrorKind
from prtag.services.release.model import PublishedRelease, PullRequestRef
from prtag.services.release.timeouts import (
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)

_PR_FIELDS = "number,title,url,author,labels"

# gh reports deleted accounts with a null author.
_GHOST_LOGIN = "ghost"

# Rate limiting, server errors and dropped connections.
_TRANSIENT_RE = re.compile(
    r"http (429|5\d\d)"
    r"|timed? ?out"
    r"|connection (reset|refused)"
    r"|(temporarily|service) unavailable"
    r"|bad gateway"
    r"|network is unreachable"
)


def _is_transient(error: ProcessError) -> bool:
    if error.returncode == NO_EXIT_STATUS and "timed out" in error.stderr:
        return True
    return _TRANSIENT_RE.search(f"{error.stderr}\n{error.stdout}".lower()) is not None


def run_gh_read(
    *,
    workspace_root: Path,
    cmd: list[str],
    kind: ReleaseErrorKind,
    message: str,
    hint: str | None = None,
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ReleaseError]:
    """Run a read-only gh command, retrying transient failures with a linear backoff."""
    last: ProcessError | None = None
    for attempt in range(1, max(1, retry_attempts) + 1):
        if last is not None:
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt - 1))
        result = run_process(cmd, cwd=workspace_root, timeout=timeout)
        if isinstance(result, Ok):
            return result
        last = result.error
        if not _is_transient(last):
            break

    detail = last.stderr.strip() if last is not None else ""
    return Err(ReleaseError(kind=kind, message=message, hint=detail or hint))


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is not None:
        return Ok(None)
    return Err(
        ReleaseError(
            kind="gh_missing",
            message="GitHub CLI (gh) not found on PATH",
            hint="Install it from https://cli.github.com/",
        )
    )


def ensure_gh_auth(*, workspace_root: Path) -> Result[None, ReleaseError]:
    status = run_process(["gh", "auth", "status"], cwd=workspace_root, timeout=GH_TIMEOUT_SECONDS)
    if isinstance(status, Ok):
        return Ok(None)
    return Err(
        ReleaseError(
            kind="gh_auth_required",
            message="gh is not authenticated",
            hint="Set GH_TOKEN in CI, or run: gh auth login",
        )
    )


def _repo_args(repo: str | None) -> list[str]:
    return ["--repo", repo] if repo else []


def _gh_read_json(
    *,
    workspace_root: Path,
    cmd: list[str],
    message: str,
) -> Result[object, ReleaseError]:
    result = run_gh_read(workspace_root=workspace_root, cmd=cmd, kind="gh_failed", message=message)
    if isinstance(result, Err):
        return result

    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="gh_failed",
                message=f"gh returned invalid JSON: {e}",
                hint=" ".join(cmd[:3]),
            )
        )
    return Ok(obj)


def parse_pull_request(obj: object) -> PullRequestRef | None:
    """Build a PullRequestRef from one `gh pr ... --json` item."""
    data = as_str_dict(obj)
    if data is None:
        return None

    number = get_int(data, "number")
    title = get_str(data, "title")
    url = get_str(data, "url")
    if number is None or title is None or url is None:
        return None

    author = _GHOST_LOGIN
    author_tbl = as_str_dict(data.get("author"))
    if author_tbl is not None:
        author = get_str(author_tbl, "login") or _GHOST_LOGIN

    labels: set[str] = set()
    for item in as_obj_list(data.get("labels")) or []:
        label_tbl = as_str_dict(item)
        if label_tbl is None:
            continue
        name = get_str(label_tbl, "name")
        if name is not None:
            labels.add(name)

    return PullRequestRef(
        number=number,
        title=title,
        author=author,
        url=url,
        labels=frozenset(labels),
    )


def find_merged_pr_for_commit(
    *,
    workspace_root: Path,
    repo: str | None,
    sha: str,
) -> Result[PullRequestRef | None, ReleaseError]:
    """Merged pull request whose merge produced `sha`.

    Searches merged pull requests by commit SHA. When the search matches
    several, the first result wins.
    """
    obj = _gh_read_json(
        workspace_root=workspace_root,
        cmd=[
            "gh",
            "pr",
            "list",
            *_repo_args(repo),
            "--search",
            sha,
            "--state",
            "merged",
            "--json",
            _PR_FIELDS,
        ],
        message=f"failed to search pull requests for commit {sha[:8]}",
    )
    if isinstance(obj, Err):
        return obj

    items = as_obj_list(obj.value)
    if items is None:
        return Err(
            ReleaseError(kind="gh_failed", message=f"unexpected pr list payload for {sha[:8]}")
        )
    if not items:
        return Ok(None)

    pr = parse_pull_request(items[0])
    if pr is None:
        return Err(
            ReleaseError(kind="gh_failed", message=f"unexpected pull request payload for {sha[:8]}")
        )
    return Ok(pr)


def get_pull_request(
    *,
    workspace_root: Path,
    repo: str | None,
    number: int,
) -> Result[PullRequestRef, ReleaseError]:
    obj = _gh_read_json(
        workspace_root=workspace_root,
        cmd=["gh", "pr", "view", str(number), *_repo_args(repo), "--json", _PR_FIELDS],
        message=f"failed to fetch pull request #{number}",
    )
    if isinstance(obj, Err):
        return obj

    pr = parse_pull_request(obj.value)
    if pr is None:
        return Err(
            ReleaseError(kind="gh_failed", message=f"unexpected payload for pull request #{number}")
        )
    return Ok(pr)


def create_release(
    *,
    workspace_root: Path,
    repo: str | None,
    tag: str,
    title: str,
    body: str,
) -> Result[PublishedRelease, ReleaseError]:
    """Create a published (non-draft, non-prerelease) release for an existing tag.

    Not retried: a second call for the same tag is rejected or duplicated
    by GitHub.
    """
    result = run_process(
        [
            "gh",
            "release",
            "create",
            tag,
            *_repo_args(repo),
            "--title",
            title,
            "--notes",
            body,
            "--verify-tag",
        ],
        cwd=workspace_root,
        timeout=GH_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="release_failed",
                message=f"failed to create release {tag}",
                hint=result.error.stderr.strip() or None,
            )
        )

    url = result.value.strip().splitlines()[-1] if result.value.strip() else None
    return Ok(PublishedRelease(tag=tag, title=title, url=url))


@dataclass(frozen=True, slots=True)
class GhClient:
    """Pull-request and release collaborator backed by the gh CLI."""

    workspace_root: Path
    repo: str | None = None

    def find_merged_pr_for_commit(self, sha: str) -> Result[PullRequestRef | None, ReleaseError]:
        return find_merged_pr_for_commit(
            workspace_root=self.workspace_root, repo=self.repo, sha=sha
        )

    def get_pull_request(self, number: int) -> Result[PullRequestRef, ReleaseError]:
        return get_pull_request(workspace_root=self.workspace_root, repo=self.repo, number=number)

    def create_release(
        self, *, tag: str, title: str, body: str
    ) -> Result[PublishedRelease, ReleaseError]:
        return create_release(
            workspace_root=self.workspace_root,
            repo=self.repo,
            tag=tag,
            title=title,
            body=body,
        )
