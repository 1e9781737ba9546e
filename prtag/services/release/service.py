from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from prtag.core.config import Config
from prtag.core.result import Err, Ok, Result
from prtag.output.console import ConsoleProtocol, Style
from prtag.services.release.bump import (
    BumpCategory,
    LabelTable,
    classify_change_set,
    classify_pull_request,
    label_table,
)
from prtag.services.release.changeset import parse_pr_numbers, resolve_automatic, resolve_manual
from prtag.services.release.contracts import (
    HistoryStore,
    PullRequestSource,
    ReleaseStore,
    git_error,
)
from prtag.services.release.errors import ReleaseError
from prtag.services.release.model import ChangeSet, PublishedRelease, TriggerKind
from prtag.services.release.notes import Changelog, render_changelog
from prtag.services.release.publish import publish_release
from prtag.services.release.semver import SemVer, next_version
from prtag.services.release.tagging import TagExists, publish_tag
from prtag.services.release.version_store import LatestTag, baseline_version, read_latest_tag


ReleaseStatus = Literal["released", "no_changes", "tag_exists", "dry_run"]


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    trigger: TriggerKind
    # Comma-separated PR numbers; required for the manual trigger.
    pr_numbers: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    status: ReleaseStatus
    commit: str
    baseline: SemVer
    change_set: ChangeSet
    bump: BumpCategory | None = None
    version: SemVer | None = None
    changelog: Changelog | None = None
    release: PublishedRelease | None = None


def _resolve_change_set(
    *,
    request: ReleaseRequest,
    history: HistoryStore,
    pull_requests: PullRequestSource,
    latest: LatestTag | None,
    head: str,
    console: ConsoleProtocol,
) -> Result[ChangeSet, ReleaseError]:
    if request.trigger == "push":
        return resolve_automatic(
            history=history,
            pull_requests=pull_requests,
            latest=latest,
            head=head,
            console=console,
        )

    if request.pr_numbers is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="manual release requires a list of PR numbers",
                hint="Pass --prs 12,15,18",
            )
        )
    numbers = parse_pr_numbers(request.pr_numbers)
    if isinstance(numbers, Err):
        return numbers
    if not numbers.value:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="no pull request numbers given",
                hint="Pass --prs 12,15,18",
            )
        )
    return resolve_manual(pull_requests=pull_requests, numbers=numbers.value, console=console)


def _print_change_set(console: ConsoleProtocol, change_set: ChangeSet, table: LabelTable) -> None:
    console.header(f"Pull requests ({len(change_set)})")
    for pr in change_set:
        category = classify_pull_request(pr, table)
        kind = str(category) if category is not None else "-"
        console.print(f"#{pr.number} [{kind}] {pr.title} (@{pr.author})")


def _print_changelog(console: ConsoleProtocol, changelog: Changelog) -> None:
    console.header("Changelog")
    for line in changelog.lines:
        console.print(line, Style.DIM)


def run_release(
    *,
    request: ReleaseRequest,
    history: HistoryStore,
    pull_requests: PullRequestSource,
    releases: ReleaseStore,
    config: Config,
    console: ConsoleProtocol,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Run the release decision pipeline once.

    HEAD, the baseline tag and every pull request are read exactly once;
    later stages only see earlier stages' outputs. Any Err stops the run.
    A pushed tag is not rolled back if the release record fails.
    """
    head = history.head_sha()
    if isinstance(head, Err):
        return Err(git_error(head.error, message="failed to resolve HEAD"))
    commit = head.value

    latest_r = read_latest_tag(history)
    if isinstance(latest_r, Err):
        return latest_r
    latest = latest_r.value
    baseline = baseline_version(latest)
    if latest is None:
        console.print("no tags found; baseline 0.0.0", Style.DIM)
    else:
        console.print(f"latest tag: {latest.name}", Style.DIM)

    change_set_r = _resolve_change_set(
        request=request,
        history=history,
        pull_requests=pull_requests,
        latest=latest,
        head=commit,
        console=console,
    )
    if isinstance(change_set_r, Err):
        return change_set_r
    change_set = change_set_r.value

    if change_set.is_empty and request.trigger == "push":
        console.info("no merged PRs since the last tag; no release necessary")
        return Ok(
            ReleaseOutcome(
                status="no_changes", commit=commit, baseline=baseline, change_set=change_set
            )
        )

    table = label_table(config.labels)
    _print_change_set(console, change_set, table)

    bump_r = classify_change_set(change_set, table)
    if isinstance(bump_r, Err):
        return bump_r
    bump = bump_r.value

    version = next_version(baseline, bump)
    console.info(f"release bump: {bump}")
    console.info(f"new version: {baseline} -> {version}")

    if request.dry_run:
        changelog = render_changelog(change_set, empty_message=config.changelog.empty)
        _print_changelog(console, changelog)
        console.print("dry run: no tag or release created", Style.DIM)
        return Ok(
            ReleaseOutcome(
                status="dry_run",
                commit=commit,
                baseline=baseline,
                change_set=change_set,
                bump=bump,
                version=version,
                changelog=changelog,
            )
        )

    tagged = publish_tag(
        history=history,
        version=version,
        commit=commit,
        remote=config.release.remote,
        console=console,
    )
    if isinstance(tagged, Err):
        return tagged
    if isinstance(tagged.value, TagExists):
        return Ok(
            ReleaseOutcome(
                status="tag_exists",
                commit=commit,
                baseline=baseline,
                change_set=change_set,
                bump=bump,
                version=version,
            )
        )

    changelog = render_changelog(change_set, empty_message=config.changelog.empty)
    _print_changelog(console, changelog)

    published = publish_release(
        releases=releases,
        version=version,
        changelog=changelog,
        heading=config.changelog.heading,
        console=console,
    )
    if isinstance(published, Err):
        return published

    return Ok(
        ReleaseOutcome(
            status="released",
            commit=commit,
            baseline=baseline,
            change_set=change_set,
            bump=bump,
            version=version,
            changelog=changelog,
            release=published.value,
        )
    )


def step_outputs(outcome: ReleaseOutcome) -> dict[str, str]:
    """Values exported to the CI step: status, version and PR numbers."""
    return {
        "status": outcome.status,
        "version": outcome.version.to_tag() if outcome.version is not None else "",
        "prs": ",".join(str(n) for n in outcome.change_set.numbers),
    }
