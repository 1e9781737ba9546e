"""Change set resolution.

Automatic mode walks first-parent history since the latest tag and maps
each commit to the merged pull request that produced it. Manual mode takes
an explicit comma-separated list of pull request numbers. Both collapse
duplicates through ChangeSet.from_refs.
"""

from __future__ import annotations

from prtag.core.result import Err, Ok, Result
from prtag.output.console import ConsoleProtocol, Style
from prtag.services.release.contracts import HistoryStore, PullRequestSource, git_error
from prtag.services.release.errors import ReleaseError
from prtag.services.release.model import ChangeSet, PullRequestRef
from prtag.services.release.version_store import LatestTag


def parse_pr_numbers(raw: str) -> Result[tuple[int, ...], ReleaseError]:
    """Parse "5, 7,,9" into (5, 7, 9); blanks are skipped, duplicates dropped."""
    numbers: list[int] = []
    seen: set[int] = set()
    for item in raw.split(","):
        token = item.strip().lstrip("#")
        if not token:
            continue
        if not (token.isascii() and token.isdigit()) or int(token) < 1:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"invalid pull request number: {item.strip()!r}",
                    hint="Expected a comma-separated list such as 12,15,18",
                )
            )
        n = int(token)
        if n in seen:
            continue
        seen.add(n)
        numbers.append(n)
    return Ok(tuple(numbers))


def resolve_range_start(
    history: HistoryStore, latest: LatestTag | None
) -> Result[str, ReleaseError]:
    """The latest tag, or the history root when nothing was released yet."""
    if latest is not None:
        return Ok(latest.name)

    roots = history.root_commits()
    if isinstance(roots, Err):
        return Err(git_error(roots.error, message="failed to find the root commit"))
    if not roots.value:
        return Err(ReleaseError(kind="git_failed", message="history has no root commit"))
    return Ok(roots.value[0])


def resolve_automatic(
    *,
    history: HistoryStore,
    pull_requests: PullRequestSource,
    latest: LatestTag | None,
    head: str,
    console: ConsoleProtocol,
) -> Result[ChangeSet, ReleaseError]:
    start = resolve_range_start(history, latest)
    if isinstance(start, Err):
        return start

    commit_range = f"{start.value}..{head}"
    console.print(f"commit range: {commit_range}", Style.DIM)

    commits = history.first_parent_commits(start.value, head)
    if isinstance(commits, Err):
        return Err(git_error(commits.error, message=f"failed to list commits in {commit_range}"))

    if not commits.value:
        console.print("no new commits since last tag", Style.DIM)
        return Ok(ChangeSet())

    found: list[PullRequestRef] = []
    for sha in commits.value:
        pr = pull_requests.find_merged_pr_for_commit(sha)
        if isinstance(pr, Err):
            return pr
        if pr.value is None:
            console.print(f"{sha[:8]}: no merged PR", Style.DIM)
            continue
        console.print(f"{sha[:8]}: #{pr.value.number}", Style.DIM)
        found.append(pr.value)

    return Ok(ChangeSet.from_refs(found))


def resolve_manual(
    *,
    pull_requests: PullRequestSource,
    numbers: tuple[int, ...],
    console: ConsoleProtocol,
) -> Result[ChangeSet, ReleaseError]:
    """Fetch each number in order; repeats collapse in ChangeSet.from_refs."""
    refs: list[PullRequestRef] = []
    for n in numbers:
        pr = pull_requests.get_pull_request(n)
        if isinstance(pr, Err):
            return pr
        refs.append(pr.value)

    change_set = ChangeSet.from_refs(refs)
    console.print(f"manual PRs: {_format_numbers(change_set)}", Style.DIM)
    return Ok(change_set)


def _format_numbers(change_set: ChangeSet) -> str:
    return ", ".join(f"#{n}" for n in change_set.numbers) or "(none)"
