"""Run git and gh as child processes and hand back a Result.

Adapters never see CalledProcessError or TimeoutExpired: a non-zero exit, a
timeout and a launch failure all come back as Err(ProcessError).

    match run(["git", "rev-parse", "HEAD"], cwd=repo_root, timeout=30.0):
        case Ok(out):
            sha = out.strip()
        case Err(failure):
            print(failure.stderr)
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from prtag.core.result import Err, Ok, Result

__all__ = ["NO_EXIT_STATUS", "ProcessError", "run"]

# returncode reported when the child never exited on its own
NO_EXIT_STATUS = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A child process that failed, timed out or could not be started."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown = f"{shown} ..."
        return f"{shown} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd` and return its captured stdout.

    `env` replaces the inherited environment when given; `timeout` is in
    seconds.
    """
    argv = tuple(cmd)
    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            env=None if env is None else dict(env),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        partial = exc.stdout if isinstance(exc.stdout, str) else ""
        return Err(ProcessError(argv, NO_EXIT_STATUS, partial, f"timed out after {timeout}s"))
    except OSError as exc:
        return Err(ProcessError(argv, NO_EXIT_STATUS, "", str(exc)))

    if completed.returncode == 0:
        return Ok(completed.stdout)
    return Err(ProcessError(argv, completed.returncode, completed.stdout, completed.stderr))
