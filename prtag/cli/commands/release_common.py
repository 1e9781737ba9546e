from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from prtag.core.errors import ErrorCode
from prtag.core.result import Err
from prtag.output.console import ConsoleProtocol, Style
from prtag.services.release.errors import ReleaseError
from prtag.services.release.gh import ensure_gh_auth, ensure_gh_available
from prtag.services.release.github_output import write_step_outputs
from prtag.services.release.service import ReleaseOutcome, step_outputs

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def exit_release(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def release_error_code(kind: str) -> ErrorCode:
    if kind in {"gh_missing", "gh_auth_required"}:
        return ErrorCode.ENV_ERROR
    if kind in {"gh_failed", "tag_push_failed", "release_failed"}:
        return ErrorCode.NETWORK_ERROR
    if kind in {"git_failed", "io_failed"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def fail_release(console: ConsoleProtocol, error: ReleaseError) -> NoReturn:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error.kind)))


def ensure_gh_ready(*, repo_root: Path, console: ConsoleProtocol) -> None:
    ok = ensure_gh_available()
    if isinstance(ok, Err):
        fail_release(console, ok.error)
    ok = ensure_gh_auth(workspace_root=repo_root)
    if isinstance(ok, Err):
        fail_release(console, ok.error)


def export_step_outputs(outcome: ReleaseOutcome, *, console: ConsoleProtocol) -> None:
    """Write status/version/prs to $GITHUB_OUTPUT when running in Actions."""
    raw = os.environ.get(GITHUB_OUTPUT_ENV)
    if not raw:
        return
    written = write_step_outputs(Path(raw), step_outputs(outcome))
    if isinstance(written, Err):
        fail_release(console, written.error)
