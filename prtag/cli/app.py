from __future__ import annotations

import os
from pathlib import Path

import typer

from prtag import __version__
from prtag.cli.commands.release_cmd import release_app
from prtag.cli.context import CONFIG_PATH_ENV, REPO_ROOT_ENV
from prtag.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Sub-apps
app.add_typer(release_app, name="release", help="Tag and publish a release.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
    repo_root: Path | None = typer.Option(
        None,
        "--repo-root",
        help="Repository checkout to release (default: current directory)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <repo-root>/prtag.toml if present)",
    ),
) -> None:
    del version

    if repo_root is not None:
        try:
            root = repo_root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo-root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --repo-root '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[REPO_ROOT_ENV] = str(root)

    if config is not None:
        os.environ[CONFIG_PATH_ENV] = str(config)


def main() -> None:
    app()
