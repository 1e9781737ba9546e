from __future__ import annotations

import typer

from prtag.cli.commands.release_common import (
    ensure_gh_ready,
    exit_release,
    export_step_outputs,
    fail_release,
)
from prtag.cli.context import build_context
from prtag.core.errors import ErrorCode
from prtag.core.result import Err
from prtag.output.console import ConsoleProtocol, Style
from prtag.services.release.gh import GhClient
from prtag.services.release.service import ReleaseOutcome, ReleaseRequest, run_release


release_app = typer.Typer(add_completion=False, no_args_is_help=True)


def _print_outcome(console: ConsoleProtocol, outcome: ReleaseOutcome) -> None:
    version = outcome.version.to_tag() if outcome.version is not None else None
    match outcome.status:
        case "released":
            count = len(outcome.change_set)
            console.success(f"released {version} ({outcome.bump} bump, {count} PRs)")
        case "no_changes":
            console.print(f"nothing to release since {outcome.baseline}", Style.DIM)
        case "tag_exists":
            console.info(f"{version} is already tagged; no new release created")
        case "dry_run":
            console.info(f"would release {version} at {outcome.commit[:8]}")


def _run(request: ReleaseRequest) -> None:
    ctx = build_context()
    ensure_gh_ready(repo_root=ctx.repo_root, console=ctx.console)

    gh = GhClient(workspace_root=ctx.repo_root, repo=ctx.config.release.repo)
    result = run_release(
        request=request,
        history=ctx.repository,
        pull_requests=gh,
        releases=gh,
        config=ctx.config,
        console=ctx.console,
    )
    if isinstance(result, Err):
        fail_release(ctx.console, result.error)

    outcome = result.value
    _print_outcome(ctx.console, outcome)
    export_step_outputs(outcome, console=ctx.console)


@release_app.command("push")
def push(
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the release; write nothing."),
) -> None:
    """Release the PRs merged on the first-parent history since the last tag."""
    _run(ReleaseRequest(trigger="push", dry_run=dry_run))


@release_app.command("manual")
def manual(
    prs: str = typer.Option(..., "--prs", help="Comma-separated PR numbers, e.g. 12,15,18"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the release; write nothing."),
) -> None:
    """Release an explicit list of PRs."""
    if not prs.strip():
        exit_release("--prs must not be empty", code=ErrorCode.USER_ERROR)
    _run(ReleaseRequest(trigger="manual", pr_numbers=prs, dry_run=dry_run))


@release_app.command("plan")
def plan(
    prs: str | None = typer.Option(
        None, "--prs", help="Plan a manual release of these PRs instead of the history walk."
    ),
) -> None:
    """Show the next version and changelog without tagging or publishing."""
    if prs is None:
        _run(ReleaseRequest(trigger="push", dry_run=True))
        return
    if not prs.strip():
        exit_release("--prs must not be empty", code=ErrorCode.USER_ERROR)
    _run(ReleaseRequest(trigger="manual", pr_numbers=prs, dry_run=True))
