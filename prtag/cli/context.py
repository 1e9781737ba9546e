from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from prtag.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from prtag.core.errors import ErrorCode
from prtag.core.result import Err
from prtag.git.repository import Repository
from prtag.output.console import ConsoleProtocol, RichConsole

REPO_ROOT_ENV = "PRTAG_REPO_ROOT"
CONFIG_PATH_ENV = "PRTAG_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    repository: Repository
    config: Config
    console: ConsoleProtocol


def _load_config(repo_root: Path) -> Config:
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        result = load_config(Path(explicit).expanduser())
    else:
        result = load_config_or_default(repo_root / CONFIG_FILENAME)

    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return result.value


def build_context() -> CLIContext:
    raw_root = os.environ.get(REPO_ROOT_ENV)
    repo_root = (Path(raw_root).expanduser() if raw_root else Path.cwd()).resolve()

    repository = Repository(repo_root)
    if not repository.exists():
        typer.echo(f"error: not a git repository: {repo_root}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        repo_root=repo_root,
        repository=repository,
        config=_load_config(repo_root),
        console=RichConsole(),
    )
